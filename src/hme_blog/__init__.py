"""Server-rendered front end for the HME ITB blog, backed by DatoCMS."""

__all__ = ["config", "datocms", "models", "similarity"]
