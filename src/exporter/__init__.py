"""Article exporter.

Renders a Markdown content item into a Confluence storage-format document
plus image bundles staged in a per-identity transient workspace.
"""

from .converter import MarkdownConverter
from .errors import ConversionError, ExportError
from .exporter import Exporter, ExporterFactory
from .workspace import Workspace, workspace_path_for

__all__ = [
    'ConversionError',
    'ExportError',
    'Exporter',
    'ExporterFactory',
    'MarkdownConverter',
    'Workspace',
    'workspace_path_for',
]
