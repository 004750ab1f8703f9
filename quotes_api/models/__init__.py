from quotes_api.models.author import Author
from quotes_api.models.quote import Quote

__all__ = ["Author", "Quote"]
