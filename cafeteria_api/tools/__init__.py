"""Developer tooling shipped with the package."""
