from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ExportRecord(BaseModel):
    """One row of a LinkedIn export CSV.

    Fields are declared with the export's column header as alias, so rows
    validate straight from ``csv.DictReader`` output and dump back to the same
    headers. Every field is optional text.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    def get(self, field: str, default: Any = None) -> Any:
        """Look a field up by export header or attribute name."""
        name = _alias_index(type(self)).get(field, field)
        if name in type(self).model_fields:
            value = getattr(self, name)
            return default if value is None else value
        return default

    def text(self, field: str) -> str:
        """Trimmed field value, empty string when absent."""
        value = self.get(field)
        return str(value).strip() if value is not None else ""

    def to_row(self) -> Dict[str, Optional[str]]:
        return self.model_dump(by_alias=True)


_ALIAS_CACHE: Dict[type, Dict[str, str]] = {}


def _alias_index(cls: type) -> Dict[str, str]:
    index = _ALIAS_CACHE.get(cls)
    if index is None:
        index = {
            (info.alias or name): name for name, info in cls.model_fields.items()
        }
        _ALIAS_CACHE[cls] = index
    return index


class Invitation(ExportRecord):
    from_name: Optional[str] = Field(default=None, alias="From")
    to_name: Optional[str] = Field(default=None, alias="To")
    sent_at: Optional[str] = Field(default=None, alias="Sent At")
    message: Optional[str] = Field(default=None, alias="Message")
    direction: Optional[str] = Field(default=None, alias="Direction")
    inviter_profile_url: Optional[str] = Field(default=None, alias="inviterProfileUrl")
    invitee_profile_url: Optional[str] = Field(default=None, alias="inviteeProfileUrl")


class JobPosting(ExportRecord):
    company_name: Optional[str] = Field(default=None, alias="Company Name")
    title: Optional[str] = Field(default=None, alias="Title")
    employment_status: Optional[str] = Field(default=None, alias="Employment Status")
    company_description: Optional[str] = Field(default=None, alias="Company Description")
    job_description: Optional[str] = Field(default=None, alias="Job Description")
    location_description: Optional[str] = Field(default=None, alias="Location Description")
    job_functions: Optional[str] = Field(default=None, alias="Job Functions")
    company_industries: Optional[str] = Field(default=None, alias="Company Industries")
    seniority_level: Optional[str] = Field(default=None, alias="Seniority Level")
    required_skills: Optional[str] = Field(default=None, alias="Required Skills")
    education_levels: Optional[str] = Field(default=None, alias="Education Levels")
    onsite_apply: Optional[str] = Field(default=None, alias="Onsite Apply")
    contact_email: Optional[str] = Field(default=None, alias="Contact Email")
    company_apply_url: Optional[str] = Field(default=None, alias="Company Apply Url")
    base_salary: Optional[str] = Field(default=None, alias="Base Salary")
    additional_compensation: Optional[str] = Field(default=None, alias="Additional Compensation")
    job_state: Optional[str] = Field(default=None, alias="Job State")
    create_date: Optional[str] = Field(default=None, alias="Create Date")
    list_date: Optional[str] = Field(default=None, alias="List Date")
    close_date: Optional[str] = Field(default=None, alias="Close Date")
    expiration_date: Optional[str] = Field(default=None, alias="Expiration Date")


class Message(ExportRecord):
    conversation_id: Optional[str] = Field(default=None, alias="CONVERSATION ID")
    conversation_title: Optional[str] = Field(default=None, alias="CONVERSATION TITLE")
    sender: Optional[str] = Field(default=None, alias="FROM")
    sender_profile_url: Optional[str] = Field(default=None, alias="SENDER PROFILE URL")
    recipients: Optional[str] = Field(default=None, alias="TO")
    recipient_profile_urls: Optional[str] = Field(default=None, alias="RECIPIENT PROFILE URLS")
    date: Optional[str] = Field(default=None, alias="DATE")
    subject: Optional[str] = Field(default=None, alias="SUBJECT")
    content: Optional[str] = Field(default=None, alias="CONTENT")
    folder: Optional[str] = Field(default=None, alias="FOLDER")
    attachments: Optional[str] = Field(default=None, alias="ATTACHMENTS")
    is_draft: Optional[str] = Field(default=None, alias="IS MESSAGE DRAFT")


class RichMedia(ExportRecord):
    date_time: Optional[str] = Field(default=None, alias="Date/Time")
    media_description: Optional[str] = Field(default=None, alias="Media Description")
    media_link: Optional[str] = Field(default=None, alias="Media Link")


class Connection(ExportRecord):
    first_name: Optional[str] = Field(default=None, alias="First Name")
    last_name: Optional[str] = Field(default=None, alias="Last Name")
    url: Optional[str] = Field(default=None, alias="URL")
    email_address: Optional[str] = Field(default=None, alias="Email Address")
    company: Optional[str] = Field(default=None, alias="Company")
    position: Optional[str] = Field(default=None, alias="Position")
    connected_on: Optional[str] = Field(default=None, alias="Connected On")
