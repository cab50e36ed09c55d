"""
statuses.py
- Purpose: Central source of truth for evidence lifecycle values.
- Design: Keep FE-facing values stable and explicit.
"""

from enum import Enum


class EvidenceStatus(str, Enum):
    PENDING = "pending"
    UPLOADING = "uploading"
    STORED = "stored"
    TIMESTAMPED = "timestamped"
    VERIFIED = "verified"
    REJECTED = "rejected"


class EvidenceCategory(str, Enum):
    HUMAN_RIGHTS_VIOLATION = "human_rights_violation"
    WAR_CRIME = "war_crime"
    ENVIRONMENTAL_CRIME = "environmental_crime"
    CORRUPTION = "corruption"
    POLICE_BRUTALITY = "police_brutality"
    CENSORSHIP = "censorship"
    DISCRIMINATION = "discrimination"
    OTHER = "other"


class SourceType(str, Enum):
    WITNESS = "witness"
    ORGANIZATION = "organization"
    ANONYMOUS = "anonymous"
    MEDIA = "media"


class AccessAction(str, Enum):
    VIEW = "view"
    DOWNLOAD = "download"
