"""HTTP interface: routers, schemas and error mapping."""
