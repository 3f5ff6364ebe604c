"""HTTP helpers the router reads from and writes to: requests and query strings."""
