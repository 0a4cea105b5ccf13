from .reference_check import ReferenceCheck, verify_reference
