"""Infrastructure Layer - IO adapters (document store, repositories, logging)."""
