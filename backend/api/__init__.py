"""HTTP surface: FastAPI routers over the application layer."""
