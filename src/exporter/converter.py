"""Markdown to Confluence storage format conversion using Pandoc."""

import re
import shutil
import subprocess

from .errors import ConversionError

PANDOC_TIMEOUT = 10


class MarkdownConverter:
    """Converts Markdown into XHTML suitable for Confluence storage format.

    Pandoc must be on the system PATH; its presence is checked on first use.
    """

    def __init__(self, pandoc_path: str = "pandoc"):
        self.pandoc_path = pandoc_path
        self._checked = False

    def markdown_to_xhtml(self, markdown: str) -> str:
        """Convert Markdown to XHTML.

        Raises:
            ConversionError: If Pandoc is missing, fails, or times out
        """
        if not markdown or not markdown.strip():
            return ""

        self._ensure_pandoc()

        try:
            result = subprocess.run(
                [self.pandoc_path, "-f", "markdown", "-t", "html"],
                input=markdown,
                text=True,
                capture_output=True,
                check=True,
                timeout=PANDOC_TIMEOUT,
            )
        except subprocess.CalledProcessError as e:
            raise ConversionError(f"Pandoc conversion failed: {e.stderr}")
        except subprocess.TimeoutExpired:
            raise ConversionError(f"Pandoc conversion timed out (>{PANDOC_TIMEOUT}s)")

        return self._convert_br_to_p_in_cells(result.stdout)

    def _ensure_pandoc(self) -> None:
        if self._checked:
            return
        if shutil.which(self.pandoc_path) is None:
            raise ConversionError(
                "Pandoc not found. Install: brew install pandoc (macOS) or "
                "apt-get install pandoc (Linux) or download from "
                "https://pandoc.org/installing.html"
            )
        self._checked = True

    def _convert_br_to_p_in_cells(self, xhtml: str) -> str:
        """Turn <br> inside table cells into <p> blocks.

        Confluence stores multi-line cell content as several <p> tags.
        """
        def convert_cell_content(match):
            tag = match.group(1)
            content = re.sub(r'<br\s*/?>', '<br>', match.group(2))
            if '<br>' not in content:
                return match.group(0)

            parts = [part.strip() for part in content.split('<br>') if part.strip()]
            if len(parts) <= 1:
                return f'<{tag}>{content.replace("<br>", "")}</{tag}>'
            return f'<{tag}>' + ''.join(f'<p>{part}</p>' for part in parts) + f'</{tag}>'

        return re.sub(r'<(td|th)>(.*?)</\1>', convert_cell_content, xhtml, flags=re.DOTALL)
