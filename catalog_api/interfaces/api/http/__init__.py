"""HTTP interface (FastAPI routers, schemas and error mapping)."""
