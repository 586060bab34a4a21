"""Host build hooks and source rewriting."""

from stylezx.plugin.edits import Edit, EditConflict, SourceEditor
from stylezx.plugin.host import StyleZxPlugin, TransformResult

__all__ = ["Edit", "EditConflict", "SourceEditor", "StyleZxPlugin", "TransformResult"]
