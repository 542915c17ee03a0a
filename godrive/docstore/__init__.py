"""Document store used by the document repository backend."""
from godrive.docstore.server import create_app, ensure_db_file

__all__ = ['create_app', 'ensure_db_file']
