from .auth import (
    AuthResponse,
    CachedSession,
    DualKeyRequest,
    PinRequest,
    RoleUpdate,
    SeniorModeRequest,
    SeniorSession,
    SessionRole,
)
from .activity import ActivityRecord, HealthVitalCreate, HealthVitalRecord
from .guardian import GuardianCreate, GuardianProfile
from .medication import MedicationCreate, MedicationRecord, MedicationUpdate
from .medication_log import (
    LogMedicationRequest,
    LogMedicationResponse,
    MedicationLogRecord,
    MedicationLogStatus,
    ReminderScanResponse,
)
from .notification import NotificationRecord
from .senior import (
    EmergencyContact,
    JoyPreferences,
    JoyPreferencesUpdate,
    LinkedSenior,
    SeniorCreate,
    SeniorProfile,
    SeniorUpdate,
)

__all__ = [
    "AuthResponse",
    "CachedSession",
    "DualKeyRequest",
    "PinRequest",
    "RoleUpdate",
    "SeniorModeRequest",
    "SeniorSession",
    "SessionRole",
    "ActivityRecord",
    "HealthVitalCreate",
    "HealthVitalRecord",
    "GuardianCreate",
    "GuardianProfile",
    "MedicationCreate",
    "MedicationRecord",
    "MedicationUpdate",
    "LogMedicationRequest",
    "LogMedicationResponse",
    "MedicationLogRecord",
    "MedicationLogStatus",
    "ReminderScanResponse",
    "NotificationRecord",
    "EmergencyContact",
    "JoyPreferences",
    "JoyPreferencesUpdate",
    "LinkedSenior",
    "SeniorCreate",
    "SeniorProfile",
    "SeniorUpdate",
]
