"""
cosec.documents
===============

Picks the right template for a stored record and packages the text as a
downloadable document.

Formats are nominal: a ``.pdf`` or ``.docx`` document still carries plain
text, only the filename and the MIME type of the data URI change.
Filenames follow ``<DocumentKind>_<ISODate>.<ext>``.
"""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence, Union

from .errors import DocumentError
from .models import CompanyProfile, CompanyState, MeetingSubType, MeetingType
from .settings import settings
from .templates import (
    agm_notice,
    annual_return,
    board_meeting_minutes,
    board_meeting_notice,
    filing_form_document,
)

logger = logging.getLogger(__name__)


class DocumentFormat(Enum):
    PDF = "pdf"
    DOCX = "docx"

    def __str__(self) -> str:
        return self.value


MIME_TYPES = {
    DocumentFormat.PDF: "application/pdf",
    DocumentFormat.DOCX: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

NOTICE = "notice"
MINUTES = "minutes"


@dataclass(frozen=True)
class GeneratedDocument:
    filename: str
    content: str
    fmt: DocumentFormat


def document_filename(kind: str, on: date, fmt: DocumentFormat) -> str:
    """``Board_Meeting_Notice_2025-03-05.docx``"""
    return f"{kind}_{on.isoformat()}.{fmt.value}"


# ---------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------
def _format(fmt: Union[DocumentFormat, str, None]) -> DocumentFormat:
    if isinstance(fmt, DocumentFormat):
        return fmt
    try:
        return DocumentFormat(fmt or settings.document_format)
    except ValueError:
        raise DocumentError(f"unsupported document format {fmt!r}") from None


def _profile(state: CompanyState) -> CompanyProfile:
    if state.company_details is None:
        raise DocumentError("a company profile is required to generate documents")
    return state.company_details


def _find(records: Sequence, record_id: str, label: str):
    for r in records:
        if r.id == record_id:
            return r
    raise DocumentError(f"{label} {record_id!r} not found")


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------
def meeting_document(
    state: CompanyState,
    meeting_id: str,
    kind: str,
    fmt: Union[DocumentFormat, str, None] = None,
    today: Optional[date] = None,
) -> GeneratedDocument:
    """
    Notice or minutes for a stored meeting.

    * ``notice`` of a Board meeting → board meeting notice
    * ``notice`` of an AGM → AGM notice
    * ``minutes`` of a Board meeting → board minutes

    Anything else raises :class:`~cosec.errors.DocumentError`.  The filename
    carries the meeting date.
    """
    fmt = _format(fmt)
    company = _profile(state)
    meeting = _find(state.meetings, meeting_id, "meeting")
    board = meeting.meeting_type is MeetingType.BOARD

    if kind == NOTICE and board:
        content, name = board_meeting_notice(company, meeting, today), "Board_Meeting_Notice"
    elif kind == NOTICE and meeting.sub_type is MeetingSubType.AGM:
        content, name = agm_notice(company, meeting, today), "AGM_Notice"
    elif kind == MINUTES and board:
        content, name = board_meeting_minutes(company, meeting, state.directors), "Board_Meeting_Minutes"
    else:
        raise DocumentError(
            f"no {kind} template for {meeting.meeting_type} meetings"
            + (f" ({meeting.sub_type})" if meeting.sub_type else "")
        )
    return GeneratedDocument(document_filename(name, meeting.date, fmt), content, fmt)


def annual_return_document(
    state: CompanyState,
    fmt: Union[DocumentFormat, str, None] = None,
    today: Optional[date] = None,
) -> GeneratedDocument:
    """Annual return (MGT-7); needs a profile, a director and a member."""
    fmt = _format(fmt)
    today = today or date.today()
    company = _profile(state)
    if not state.directors:
        raise DocumentError("at least one director is required to generate the annual return")
    if not state.members:
        raise DocumentError("at least one member is required to generate the annual return")
    content = annual_return(company, state.directors, state.members, today)
    return GeneratedDocument(document_filename("Annual_Return_MGT7", today, fmt), content, fmt)


def filing_document(
    state: CompanyState,
    filing_id: str,
    fmt: Union[DocumentFormat, str, None] = None,
    today: Optional[date] = None,
) -> GeneratedDocument:
    """Form text for a stored filing: the annual return for MGT-7, a placeholder otherwise."""
    fmt = _format(fmt)
    today = today or date.today()
    company = _profile(state)
    filing = _find(state.filings, filing_id, "filing")
    if filing.form_number == "MGT-7":
        content = annual_return(company, state.directors, state.members, today)
        return GeneratedDocument(document_filename("Annual_Return", today, fmt), content, fmt)
    content = filing_form_document(company, filing)
    return GeneratedDocument(document_filename(filing.form_number, today, fmt), content, fmt)


def write_document(doc: GeneratedDocument, directory: Optional[Path] = None) -> Path:
    """Write *doc* as UTF‑8 text into *directory* (default ``settings.export_dir``)."""
    directory = Path(directory or settings.export_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / doc.filename
    path.write_text(doc.content, encoding="utf-8")
    logger.info(f"Wrote {path}")
    return path


def as_data_uri(doc: GeneratedDocument) -> str:
    """Base64 data URI with the MIME type of the nominal format."""
    payload = base64.b64encode(doc.content.encode("utf-8")).decode("ascii")
    return f"data:{MIME_TYPES[doc.fmt]};base64,{payload}"
