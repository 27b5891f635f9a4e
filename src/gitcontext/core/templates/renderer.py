"""
File Template Renderer

Renders one file through a placeholder template. Placeholders are plain
``#file_*`` tokens replaced by literal substitution; every occurrence is
replaced and text without placeholders passes through unchanged.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

from gitcontext.core.exceptions import read_error
from gitcontext.utils import creation_timestamp, format_timestamp, get_file_extension


PLACEHOLDERS = (
    '#file_name',
    '#file_path',
    '#file_size',
    '#file_extension',
    '#file_creation_date',
    '#file_modification_date',
    '#file_content',
)

_PLACEHOLDER_RE = re.compile('|'.join(re.escape(p) for p in PLACEHOLDERS))
_TOKEN_RE = re.compile(r'#file_[a-z_]+')

PRESETS: Dict[str, str] = {
    'default': (
        "File: #file_path\n"
        "Size: #file_size bytes\n"
        "Modified: #file_modification_date\n"
        "Content:\n"
        "#file_content\n"
    ),
    'markdown': "## #file_path\n\n```#file_extension\n#file_content\n```\n",
    'xml': (
        '<file name="#file_name" path="#file_path" size="#file_size" '
        'created="#file_creation_date" modified="#file_modification_date">\n'
        "#file_content\n"
        "</file>"
    ),
    'plain': "#file_content",
}


@dataclass(frozen=True)
class FileDescriptor:
    """
    Metadata of one file, read from the filesystem at processing time.

    Attributes:
        name: File name without directories
        path: Absolute path
        size: Size in bytes
        extension: Text after the last dot, empty if none
        created: Creation timestamp (POSIX seconds)
        modified: Last modification timestamp (POSIX seconds)
    """
    name: str
    path: str
    size: int
    extension: str
    created: float
    modified: float

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> 'FileDescriptor':
        """Stat ``path`` and build its descriptor."""
        file_path = Path(path).absolute()
        stat_result = os.stat(file_path)
        return cls(
            name=file_path.name,
            path=str(file_path),
            size=stat_result.st_size,
            extension=get_file_extension(file_path.name),
            created=creation_timestamp(stat_result),
            modified=stat_result.st_mtime,
        )

    def to_variables(self, content: str) -> Dict[str, str]:
        """Placeholder values for this file."""
        return {
            '#file_name': self.name,
            '#file_path': self.path,
            '#file_size': str(self.size),
            '#file_extension': self.extension or "",
            '#file_creation_date': format_timestamp(self.created),
            '#file_modification_date': format_timestamp(self.modified),
            '#file_content': content,
        }


def substitute(template: str, variables: Dict[str, str]) -> str:
    """
    Replace every placeholder occurrence in ``template``.

    Done in a single pass, so values that themselves contain placeholder
    text (a file documenting this tool, say) are inserted verbatim.
    """
    return _PLACEHOLDER_RE.sub(lambda match: variables.get(match.group(0), match.group(0)), template)


class TemplateRenderer:
    """
    Renders files through a placeholder template.

    The template is fixed for a run; ``render`` may override it per call.
    """

    def __init__(
        self,
        template: Optional[str] = None,
        encoding: str = 'utf-8',
        decode_errors: str = 'replace'
    ):
        """
        Args:
            template: Template text, defaults to the ``default`` preset
            encoding: Text encoding used to decode file content
            decode_errors: Codec error handler; ``replace`` substitutes U+FFFD
                for malformed bytes, ``strict`` turns them into read failures
        """
        self.logger = logging.getLogger(__name__)
        self.template = template if template is not None else PRESETS['default']
        self.encoding = encoding
        self.decode_errors = decode_errors
        self.presets = dict(PRESETS)

    def describe(self, file: Union[str, Path]) -> FileDescriptor:
        """
        Collect metadata for ``file``.

        Raises:
            FileReadError: If the file cannot be stat'ed
        """
        try:
            return FileDescriptor.from_path(file)
        except OSError as e:
            raise read_error(file, e) from e

    def read_content(self, file: Union[str, Path]) -> str:
        """
        Read the whole file as text.

        Raises:
            FileReadError: If the file cannot be read, or cannot be decoded
                under a ``strict`` error handler
        """
        try:
            # newline='' keeps line endings exactly as stored
            with open(file, 'r', encoding=self.encoding, errors=self.decode_errors, newline='') as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise read_error(file, e) from e

    def render(self, file: Union[str, Path], template: Optional[str] = None) -> str:
        """
        Render ``file`` through the template.

        Args:
            file: Path of the file to render
            template: Template override for this call

        Returns:
            The template with every placeholder substituted

        Raises:
            FileReadError: If the file cannot be read
        """
        descriptor = self.describe(file)
        content = self.read_content(file)
        return self.render_descriptor(descriptor, content, template)

    def render_descriptor(
        self,
        descriptor: FileDescriptor,
        content: str,
        template: Optional[str] = None
    ) -> str:
        """Render already collected metadata and content."""
        text = self.template if template is None else template
        return substitute(text, descriptor.to_variables(content))

    def get_preset(self, preset_name: str) -> Optional[str]:
        """Get a predefined template by name."""
        return self.presets.get(preset_name)

    def list_presets(self) -> List[str]:
        """Get list of available preset names."""
        return list(self.presets.keys())

    @staticmethod
    def placeholders_in(template: str) -> List[str]:
        """Known placeholders used by ``template``, in order of first use."""
        found = []
        for match in _PLACEHOLDER_RE.finditer(template):
            if match.group(0) not in found:
                found.append(match.group(0))
        return found

    def validate_template(self, template: Optional[str] = None) -> List[str]:
        """
        Check a template for likely mistakes.

        Returns:
            List of warning messages (empty if the template looks fine)
        """
        text = self.template if template is None else template
        warnings = []

        if not text:
            warnings.append("Template is empty")
            return warnings

        if not self.placeholders_in(text):
            warnings.append("Template contains no placeholders; every file renders the same text")

        unknown = sorted({
            token for token in _TOKEN_RE.findall(text)
            if not any(token.startswith(p) for p in PLACEHOLDERS)
        })
        if unknown:
            warnings.append(f"Unknown placeholders left as-is: {', '.join(unknown)}")

        return warnings
