from noteful.models.folder import Folder
from noteful.models.note import Note

__all__ = ["Folder", "Note"]
