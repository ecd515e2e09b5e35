from .clinical_records import ClinicalRecordsService

# Per-entity modules take a Session; ClinicalRecordsService adds the role
# gate, locking and transactions on top of them.

__all__ = ["ClinicalRecordsService"]
