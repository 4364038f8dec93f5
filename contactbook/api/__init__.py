"""HTTP layer: routers, dependencies, access gates and error handlers."""
