from enum import Enum

# User roles in the system
class UserRole(str, Enum):
    ADMIN = "admin"
    CITIZEN = "citizen"

# Report lifecycle states (no enforced transition graph)
class ReportStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    FINISHED = "finished"

# Priority tiers, derived from upvotes
class ReportPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

# Issue categories a citizen can pick
class ReportCategory(str, Enum):
    SEWAGE = "sewage"
    ELECTRICITY = "electricity"
    WASTE = "waste"
    ROADS = "roads"
    TRANSPORT = "transport"
    OTHER = "other"

# File kinds accepted by the upload endpoint
class UploadType(str, Enum):
    IMAGE = "image"
    AUDIO = "audio"
