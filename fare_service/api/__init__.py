from fare_service.api.app import create_app

__all__ = ["create_app"]
