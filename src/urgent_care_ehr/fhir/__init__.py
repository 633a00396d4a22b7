from .fhir_client import FHIRClient

__all__ = ["FHIRClient"]
