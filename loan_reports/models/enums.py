"""Enumeration types for loan back-office entities."""

from enum import Enum, IntEnum


class ApplicationStatus(IntEnum):
    """Lifecycle stage of a loan application, as coded by the origination API."""

    NEWLY_CREATED = 1
    PENDING_REVIEW = 2
    REQUEST_MORE_INFO = 3
    REJECTED = 4
    APPROVED = 5
    CONTRACT_SIGNED = 6
    DISBURSED = 7

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


STATUS_LABELS: dict[ApplicationStatus, str] = {
    ApplicationStatus.NEWLY_CREATED: "1. Newly Created",
    ApplicationStatus.PENDING_REVIEW: "2. Pending Review",
    ApplicationStatus.REQUEST_MORE_INFO: "3. Request More Info",
    ApplicationStatus.REJECTED: "4. Rejected",
    ApplicationStatus.APPROVED: "5. Approved",
    ApplicationStatus.CONTRACT_SIGNED: "6. Contract signed",
    ApplicationStatus.DISBURSED: "7. Disbursed",
}


class CorrectionKind(str, Enum):
    DISBURSEMENT = "disbursement"
    SERVICE_FEE = "service_fee"


class LegalDocumentType(str, Enum):
    CCCD = "CCCD"  # Citizen identification card
    HC = "HC"  # Passport


LEGAL_DOCUMENT_NAMES: dict[LegalDocumentType, str] = {
    LegalDocumentType.CCCD: "Căn cước công dân",
    LegalDocumentType.HC: "Hộ chiếu",
}


class SourceChannel(str, Enum):
    APPS = "Apps"
    CTV = "CTV"  # Collaborator network
    WEBSITE = "Website"


class ScheduleType(str, Enum):
    INTEREST = "Interest"
    FEE = "Fee"
    PRINCIPAL = "Principal"


class ReportType(str, Enum):
    DAILY = "daily"
    MONTHLY = "monthly"
    DATE_RANGE = "date_range"
