from travel_intel.web.app import create_app

__all__ = ["create_app"]
