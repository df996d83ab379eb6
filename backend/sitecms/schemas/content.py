from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator

from sitecms.models.blog import BLOG_CATEGORIES
from sitecms.models.faq import FAQ_CATEGORIES
from sitecms.models.project import PROJECT_CATEGORIES
from .base import RequestModel, lowered, one_of, parse_date


class BlogInput(RequestModel):
    title: Optional[str] = Field(None, max_length=200)
    excerpt: Optional[str] = Field(None, max_length=500)
    content: Optional[str] = None
    author: Optional[str] = None
    date: Optional[datetime] = None
    category: Optional[str] = None
    image: Optional[str] = None
    read_time: Optional[str] = None
    published: Optional[bool] = None
    tags: Optional[List[str]] = None
    is_active: Optional[bool] = None

    @field_validator("date", mode="before")
    @classmethod
    def check_date(cls, value):
        return parse_date(value)

    @field_validator("category")
    @classmethod
    def check_category(cls, value):
        return one_of(value, BLOG_CATEGORIES, "blog category")


class ProjectInput(RequestModel):
    title: Optional[str] = Field(None, max_length=200)
    category: Optional[str] = None
    location: Optional[str] = None
    year: Optional[str] = None
    client: Optional[str] = None
    description: Optional[str] = Field(None, max_length=2000)
    scope: Optional[List[str]] = None
    challenges: Optional[str] = Field(None, max_length=1000)
    solution: Optional[str] = Field(None, max_length=1000)
    results: Optional[List[str]] = None
    image: Optional[str] = None
    gallery: Optional[List[str]] = None
    is_active: Optional[bool] = None

    @field_validator("category")
    @classmethod
    def check_category(cls, value):
        return one_of(value, PROJECT_CATEGORIES, "project category")


class SubServiceInput(RequestModel):
    title: str = Field(min_length=1)
    blog_id: str = Field(min_length=1)


class ServiceInput(RequestModel):
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    sub_services: Optional[List[SubServiceInput]] = None
    applications: Optional[List[str]] = None
    gradient: Optional[str] = None
    image: Optional[str] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None


class FAQInput(RequestModel):
    question: Optional[str] = Field(None, max_length=500)
    answer: Optional[str] = Field(None, max_length=3000)
    category: Optional[str] = None
    order: Optional[int] = None
    active: Optional[bool] = None

    @field_validator("category")
    @classmethod
    def check_category(cls, value):
        return one_of(lowered(value), FAQ_CATEGORIES, "FAQ category")


class TestimonialInput(RequestModel):
    name: Optional[str] = Field(None, max_length=100)
    position: Optional[str] = Field(None, max_length=100)
    company: Optional[str] = Field(None, max_length=100)
    testimonial: Optional[str] = Field(None, max_length=1000)
    image: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    order: Optional[int] = None
    active: Optional[bool] = None


class TrustedByInput(RequestModel):
    name: Optional[str] = Field(None, max_length=200)
    logo: Optional[str] = None
    order: Optional[int] = None
    active: Optional[bool] = None


class ReorderItem(RequestModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    order: int


class ReorderInput(RequestModel):
    """Accepts ``items`` or the resource-named key older clients send."""

    items: Optional[List[ReorderItem]] = None
    services: Optional[List[ReorderItem]] = None
    faqs: Optional[List[ReorderItem]] = None
    testimonials: Optional[List[ReorderItem]] = None
    companies: Optional[List[ReorderItem]] = None

    def pairs(self) -> list[dict]:
        for key in ("items", "services", "faqs", "testimonials", "companies"):
            chosen = getattr(self, key)
            if chosen is not None:
                return [{"id": item.id, "order": item.order} for item in chosen]
        return []
