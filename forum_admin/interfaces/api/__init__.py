"""HTTP interface built with FastAPI."""
