__version__ = "1.0.0"
__description__ = "mockrest : convention-driven REST API and OpenAPI docs for a JSON document"
