"""Exporter: turns a content item into an article document plus bundles.

Generation steps:
    1. Read the Markdown source and its frontmatter
    2. Resolve the title (frontmatter ``title``, first H1, or file name)
    3. Convert the body to storage XHTML with Pandoc
    4. Replace local <img> references with attachment macros and stage the
       referenced files in the workspace as bundles
"""

import hashlib
import logging
import mimetypes
import re
import shutil
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from urllib.parse import unquote, urlparse

from bs4 import BeautifulSoup

from src.content_store.errors import ContentStoreError
from src.content_store.store import ContentStore
from src.publishing_client.models import ArticleDocument, Bundle

from .converter import MarkdownConverter
from .errors import ExportError
from .workspace import Workspace, workspace_path_for

logger = logging.getLogger(__name__)

H1_PATTERN = re.compile(r'^#\s+(.+?)\s*#*\s*$', re.MULTILINE)


def _is_remote_source(src: str) -> bool:
    parsed = urlparse(src)
    return bool(parsed.scheme) or src.startswith('//')


class Exporter:
    """Generates the article for one content item inside its workspace.

    ``generate()`` must be called before ``get_document()`` and
    ``get_bundles()``. The workspace is not cleaned by the exporter itself;
    callers bracket generation with ``workspace().clean_up()``.
    """

    def __init__(
        self,
        content_store: ContentStore,
        content_id: str,
        workspace: Workspace,
        converter: Optional[MarkdownConverter] = None,
    ):
        self.content_store = content_store
        self.content_id = content_id
        self._workspace = workspace
        self.converter = converter or MarkdownConverter()
        self._document: Optional[ArticleDocument] = None
        self._bundles: Optional[List[Bundle]] = None

    def workspace(self) -> Workspace:
        return self._workspace

    def generate(self) -> None:
        """Produce the document and bundles.

        Raises:
            ExportError: If the source cannot be read, has malformed
                frontmatter, or references a missing local image
            ConversionError: If Pandoc conversion fails
        """
        try:
            source = self.content_store.read(self.content_id)
        except ContentStoreError as e:
            raise ExportError(self.content_id, str(e)) from e
        source_path = self.content_store.path_for(self.content_id)

        title, body = self._resolve_title(source.meta, source.body, source_path)
        xhtml = self.converter.markdown_to_xhtml(body)
        xhtml, bundles = self._stage_images(xhtml, source_path.parent)

        labels = source.meta.get('labels') or []
        self._document = ArticleDocument(title=title, body=xhtml, labels=list(labels))
        self._bundles = bundles
        logger.info(f"Generated {self.content_id}: '{title}' with {len(bundles)} bundle(s)")

    def get_document(self) -> ArticleDocument:
        if self._document is None:
            raise ExportError(self.content_id, "document requested before generate()")
        return self._document

    def get_bundles(self) -> List[Bundle]:
        if self._bundles is None:
            raise ExportError(self.content_id, "bundles requested before generate()")
        return list(self._bundles)

    def _resolve_title(self, meta: Dict, body: str, source_path: Path) -> Tuple[str, str]:
        """Pick the article title; a leading H1 used as title is removed from the body."""
        title = meta.get('title')
        if title:
            return str(title).strip(), body

        match = H1_PATTERN.search(body)
        if match and not body[:match.start()].strip():
            return match.group(1).strip(), body[match.end():].lstrip('\n')

        return source_path.stem.replace('-', ' ').replace('_', ' ').strip(), body

    def _stage_images(self, xhtml: str, source_dir: Path) -> Tuple[str, List[Bundle]]:
        """Copy local images into the workspace and point the body at attachments."""
        soup = BeautifulSoup(xhtml, 'html.parser')
        bundles: List[Bundle] = []
        names_by_source: Dict[Path, str] = {}
        content_root = self.content_store.content_dir.resolve()

        for img in soup.find_all('img'):
            src = (img.get('src') or '').strip()
            if not src or _is_remote_source(src):
                continue

            image_path = (source_dir / unquote(src)).resolve()
            try:
                image_path.relative_to(content_root)
            except ValueError:
                raise ExportError(self.content_id, f"image outside content directory: {src}")
            if not image_path.is_file():
                raise ExportError(self.content_id, f"image not found: {src}")

            name = names_by_source.get(image_path)
            if name is None:
                name = self._bundle_name(image_path, names_by_source.values())
                names_by_source[image_path] = name
                bundles.append(self._stage(image_path, name))

            macro = soup.new_tag('ac:image')
            if img.get('alt'):
                macro['ac:alt'] = img['alt']
            attachment = soup.new_tag('ri:attachment')
            attachment['ri:filename'] = name
            macro.append(attachment)
            img.replace_with(macro)

        return str(soup), bundles

    @staticmethod
    def _bundle_name(image_path: Path, taken) -> str:
        name = image_path.name
        if name in taken:
            digest = hashlib.sha1(str(image_path).encode('utf-8')).hexdigest()[:8]
            name = f"{image_path.stem}-{digest}{image_path.suffix}"
        return name

    def _stage(self, image_path: Path, name: str) -> Bundle:
        target = self._workspace.ensure() / name
        try:
            shutil.copyfile(image_path, target)
        except OSError as e:
            raise ExportError(self.content_id, f"cannot stage {image_path.name}: {e}") from e
        return Bundle(name=name, path=target, content_type=mimetypes.guess_type(name)[0])


class ExporterFactory:
    """Builds an Exporter per content identity, each with its own workspace."""

    def __init__(
        self,
        content_store: ContentStore,
        workspace_dir: str,
        converter: Optional[MarkdownConverter] = None,
    ):
        self.content_store = content_store
        self.workspace_dir = workspace_dir
        self.converter = converter or MarkdownConverter()

    def __call__(self, content_id: str) -> Exporter:
        workspace = Workspace(workspace_path_for(self.workspace_dir, content_id))
        return Exporter(self.content_store, content_id, workspace, self.converter)
