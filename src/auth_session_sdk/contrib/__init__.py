"""Framework integrations (FastAPI, Django) and the IoC container."""
