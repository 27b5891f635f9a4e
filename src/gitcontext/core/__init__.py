"""
Core components for gitcontext: configuration, errors, templates,
traversal and the processing driver.
"""
