"""BYB focus timer and reminder service.

The package intentionally re-exports nothing; importing submodules directly
keeps the FastAPI application, the timer engine and the CLI independent.
"""
