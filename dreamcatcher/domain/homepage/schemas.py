"""Homepage CMS schemas - hero slides, About section, testimonials and Instagram posts"""

from typing import Optional

from pydantic import BaseModel, Field

from ...schemas import ORMModel, RequestModel


class SlideCreate(RequestModel):
    image_url: str = Field(min_length=1)
    title: Optional[str] = Field(default=None, max_length=255)
    subtitle: Optional[str] = Field(default=None, max_length=255)
    button_text: Optional[str] = Field(default=None, max_length=255)
    button_link: Optional[str] = Field(default=None, max_length=255)


class SlideUpdate(RequestModel):
    image_url: Optional[str] = Field(default=None, min_length=1)
    title: Optional[str] = Field(default=None, max_length=255)
    subtitle: Optional[str] = Field(default=None, max_length=255)
    button_text: Optional[str] = Field(default=None, max_length=255)
    button_link: Optional[str] = Field(default=None, max_length=255)


class SlideResponse(ORMModel):
    id: int
    image_url: str
    title: Optional[str] = None
    subtitle: Optional[str] = None
    button_text: Optional[str] = None
    button_link: Optional[str] = None
    sort_order: int


class AboutSection(BaseModel):
    title: Optional[str] = None
    text: Optional[str] = None
    image_url: Optional[str] = None


class AboutUpdate(RequestModel):
    title: Optional[str] = None
    text: Optional[str] = None
    image_url: Optional[str] = None


class PublicAboutSection(BaseModel):
    about_us_title: str
    about_us_text: str
    about_us_image_url: Optional[str] = None


class TestimonialCreate(RequestModel):
    author: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)


class TestimonialUpdate(RequestModel):
    author: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = Field(default=None, min_length=1)


class TestimonialResponse(ORMModel):
    id: int
    author: str
    content: str


class InstagramPostCreate(RequestModel):
    post_url: str = Field(min_length=1)
    image_url: str = Field(min_length=1)
    caption: Optional[str] = None


class InstagramPostResponse(ORMModel):
    id: int
    post_url: str
    image_url: str
    caption: Optional[str] = None
    sort_order: int


class HomepageContent(BaseModel):
    slides: list[SlideResponse]
    aboutSection: PublicAboutSection
    testimonials: list[TestimonialResponse]
    instagramPosts: list[InstagramPostResponse]
