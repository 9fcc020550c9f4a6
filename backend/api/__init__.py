"""HTTP surface: dependencies, response helpers and route modules."""
