"""Homepage router - public landing page content and the admin homepage editor"""

from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from ...schemas import MessageResponse, OrderUpdate, UploadResponse
from ...utils.blob_storage import get_storage
from .schemas import (
    AboutSection,
    AboutUpdate,
    HomepageContent,
    InstagramPostCreate,
    InstagramPostResponse,
    SlideCreate,
    SlideResponse,
    SlideUpdate,
    TestimonialCreate,
    TestimonialResponse,
    TestimonialUpdate,
)
from .service import HomepageService

router = APIRouter(tags=["Homepage"])
admin_router = APIRouter(
    prefix="/admin/homepage", tags=["Admin Homepage"], dependencies=[Depends(get_current_admin)]
)


def get_homepage_service(
    db: Session = Depends(get_db), storage=Depends(get_storage)
) -> HomepageService:
    return HomepageService(db, storage)


@router.get("/homepage-content", response_model=HomepageContent)
async def homepage_content(service: HomepageService = Depends(get_homepage_service)):
    return service.content()


# ============================================================================
# HERO SLIDES
# ============================================================================


@admin_router.get("/slides", response_model=list[SlideResponse])
async def list_slides(service: HomepageService = Depends(get_homepage_service)):
    return service.list_slides()


@admin_router.post("/slides", response_model=SlideResponse, status_code=status.HTTP_201_CREATED)
async def create_slide(data: SlideCreate, service: HomepageService = Depends(get_homepage_service)):
    return service.create_slide(data)


@admin_router.post("/slides/upload", response_model=UploadResponse)
async def upload_slide_image(
    file: UploadFile = File(...), service: HomepageService = Depends(get_homepage_service)
):
    return await service.upload_image(file)


@admin_router.post("/slides/order", response_model=MessageResponse)
async def reorder_slides(data: OrderUpdate, service: HomepageService = Depends(get_homepage_service)):
    service.reorder_slides(data.orderedIds)
    return MessageResponse(message="Kolejność zaktualizowana.")


@admin_router.patch("/slides/{slide_id}", response_model=SlideResponse)
async def update_slide(
    slide_id: int, data: SlideUpdate, service: HomepageService = Depends(get_homepage_service)
):
    return service.update_slide(slide_id, data)


@admin_router.delete("/slides/{slide_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_slide(slide_id: int, service: HomepageService = Depends(get_homepage_service)):
    service.delete_slide(slide_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# ABOUT SECTION
# ============================================================================


@admin_router.get("/about", response_model=AboutSection)
async def get_about(service: HomepageService = Depends(get_homepage_service)):
    return service.get_about()


@admin_router.patch("/about", response_model=MessageResponse)
async def update_about(data: AboutUpdate, service: HomepageService = Depends(get_homepage_service)):
    service.update_about(data)
    return MessageResponse(message="Sekcja O nas zaktualizowana.")


@admin_router.post("/about/upload", response_model=UploadResponse)
async def upload_about_image(
    file: UploadFile = File(...), service: HomepageService = Depends(get_homepage_service)
):
    return await service.upload_image(file)


# ============================================================================
# TESTIMONIALS
# ============================================================================


@admin_router.get("/testimonials", response_model=list[TestimonialResponse])
async def list_testimonials(service: HomepageService = Depends(get_homepage_service)):
    return service.list_testimonials()


@admin_router.post(
    "/testimonials", response_model=TestimonialResponse, status_code=status.HTTP_201_CREATED
)
async def create_testimonial(
    data: TestimonialCreate, service: HomepageService = Depends(get_homepage_service)
):
    return service.create_testimonial(data)


@admin_router.patch("/testimonials/{testimonial_id}", response_model=TestimonialResponse)
async def update_testimonial(
    testimonial_id: int,
    data: TestimonialUpdate,
    service: HomepageService = Depends(get_homepage_service),
):
    return service.update_testimonial(testimonial_id, data)


@admin_router.delete("/testimonials/{testimonial_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_testimonial(
    testimonial_id: int, service: HomepageService = Depends(get_homepage_service)
):
    service.delete_testimonial(testimonial_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# INSTAGRAM POSTS
# ============================================================================


@admin_router.get("/instagram", response_model=list[InstagramPostResponse])
async def list_instagram_posts(service: HomepageService = Depends(get_homepage_service)):
    return service.list_instagram_posts()


@admin_router.post(
    "/instagram", response_model=InstagramPostResponse, status_code=status.HTTP_201_CREATED
)
async def create_instagram_post(
    data: InstagramPostCreate, service: HomepageService = Depends(get_homepage_service)
):
    return service.create_instagram_post(data)


@admin_router.post("/instagram/upload", response_model=UploadResponse)
async def upload_instagram_image(
    file: UploadFile = File(...), service: HomepageService = Depends(get_homepage_service)
):
    return await service.upload_image(file)


@admin_router.post("/instagram/order", response_model=MessageResponse)
async def reorder_instagram_posts(
    data: OrderUpdate, service: HomepageService = Depends(get_homepage_service)
):
    service.reorder_instagram_posts(data.orderedIds)
    return MessageResponse(message="Kolejność zaktualizowana.")


@admin_router.delete("/instagram/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_instagram_post(
    post_id: int, service: HomepageService = Depends(get_homepage_service)
):
    service.delete_instagram_post(post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
