from app.db.models.article import Article

__all__ = ["Article"]
