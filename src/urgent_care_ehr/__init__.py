"""Partner EHR visit status translation into FHIR R4 resource patches."""

__version__ = "0.1.0"
