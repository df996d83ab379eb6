from typing import Optional

from pydantic import Field, field_validator

from sitecms.models.contact import CONTACT_SERVICE_TYPES
from sitecms.models.quote import (
    QUOTE_BUDGETS,
    QUOTE_PROJECT_TYPES,
    QUOTE_SERVICE_TYPES,
    QUOTE_TIMELINES,
)
from .base import RequestModel, lowered, normalize_email, one_of


class ContactInput(RequestModel):
    name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = None
    service_type: Optional[str] = None
    message: Optional[str] = Field(None, max_length=2000)

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        return normalize_email(value)

    @field_validator("service_type")
    @classmethod
    def check_service_type(cls, value):
        return one_of(lowered(value), CONTACT_SERVICE_TYPES, "service type")


class QuoteInput(RequestModel):
    name: Optional[str] = Field(None, max_length=100)
    company: Optional[str] = Field(None, max_length=150)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = None
    service_type: Optional[str] = None
    project_type: Optional[str] = None
    project_size: Optional[str] = Field(None, max_length=100)
    timeline: Optional[str] = None
    budget: Optional[str] = None
    description: Optional[str] = Field(None, max_length=3000)
    address: Optional[str] = Field(None, max_length=300)

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        return normalize_email(value)

    @field_validator("service_type")
    @classmethod
    def check_service_type(cls, value):
        return one_of(lowered(value), QUOTE_SERVICE_TYPES, "service type")

    @field_validator("project_type")
    @classmethod
    def check_project_type(cls, value):
        return one_of(lowered(value), QUOTE_PROJECT_TYPES, "project type")

    @field_validator("timeline")
    @classmethod
    def check_timeline(cls, value):
        return one_of(lowered(value), QUOTE_TIMELINES, "timeline")

    @field_validator("budget")
    @classmethod
    def check_budget(cls, value):
        return one_of(lowered(value), QUOTE_BUDGETS, "budget")


class LeadStatusInput(RequestModel):
    status: Optional[str] = None
