from typing import List, Literal, Optional

from pydantic import Field

from .base import RequestModel


# Homepage

class HeroButton(RequestModel):
    id: Optional[str] = None
    label: str
    route: str
    variant: Literal["primary", "outline"] = "primary"


class HeroSection(RequestModel):
    title: Optional[str] = None
    title_highlight: Optional[str] = None
    subtitle: Optional[str] = None
    images: Optional[List[str]] = None
    buttons: Optional[List[HeroButton]] = None


class HomeAboutSection(RequestModel):
    subtitle: Optional[str] = None
    title: Optional[str] = None
    description1: Optional[str] = None
    description2: Optional[str] = None
    image: Optional[str] = None
    managing_director: Optional[str] = None


class ContactCTASection(RequestModel):
    heading: Optional[str] = None
    subheading: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class HomeServiceItem(RequestModel):
    id: Optional[str] = None
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    icon: str = ""


class HomepageInput(RequestModel):
    hero: Optional[HeroSection] = None
    about: Optional[HomeAboutSection] = None
    services: Optional[List[HomeServiceItem]] = None
    contact_cta: Optional[ContactCTASection] = Field(None, alias="contactCTA")


class HomeServicesInput(RequestModel):
    services: List[HomeServiceItem]


# About

class AboutMainInput(RequestModel):
    hero_title: Optional[str] = None
    hero_subtitle: Optional[str] = None
    mission: Optional[str] = None
    vision: Optional[str] = None


class AboutStoryInput(RequestModel):
    history: Optional[str] = None
    story_title: Optional[str] = None
    story_image: Optional[str] = None
    founded_year: Optional[str] = None
    experience: Optional[str] = None
    completed_projects: Optional[str] = None


class AboutLeadershipInput(RequestModel):
    director_name: Optional[str] = None
    director_position: Optional[str] = None
    director_experience: Optional[str] = None
    director_bio: Optional[str] = None


class TeamMemberInput(RequestModel):
    id: Optional[str] = None
    name: str = Field(min_length=1)
    position: str = Field(min_length=1)
    email: Optional[str] = None
    bio: Optional[str] = None
    image: Optional[str] = None


class AboutValueInput(RequestModel):
    id: Optional[str] = None
    icon: str = "Award"
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)


class AboutStatInput(RequestModel):
    label: str = Field(min_length=1)
    value: str = Field(min_length=1)


class AboutInput(AboutMainInput, AboutStoryInput, AboutLeadershipInput):
    values: Optional[List[AboutValueInput]] = None
    team: Optional[List[TeamMemberInput]] = None
    stats: Optional[List[AboutStatInput]] = None
