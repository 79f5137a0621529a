"""ORM Models - relational tables backing the document store."""
