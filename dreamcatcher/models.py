import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_rsvp_token():
    """Generate a unique token for the public RSVP link"""
    return str(uuid.uuid4())


class Admin(Base):
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    notification_email = Column(String(255), nullable=True)  # Where inbox/questionnaire alerts go
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class AccessKey(Base):
    __tablename__ = "access_keys"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(6), unique=True, index=True, nullable=False)
    client_name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(String(4), unique=True, index=True, nullable=False)  # 4-digit login
    password_hash = Column(String(255), nullable=False)
    access_key = Column(String(255), nullable=False)
    package_name = Column(String(255), nullable=False)
    total_price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    selected_items = Column(JSON, default=list, nullable=True)  # Ordered list of item identifiers
    bride_name = Column(String(255), nullable=True)
    groom_name = Column(String(255), nullable=True)
    wedding_date = Column(Date, nullable=True)
    bride_address = Column(Text, nullable=True)
    groom_address = Column(Text, nullable=True)
    church_location = Column(Text, nullable=True)
    venue_location = Column(Text, nullable=True)
    schedule = Column(Text, nullable=True)
    email = Column(String(255), index=True, nullable=False)
    phone_number = Column(String(255), nullable=False)
    additional_info = Column(Text, nullable=True)
    discount_code = Column(String(255), nullable=True)
    payment_status = Column(String(50), default="pending", nullable=False)  # pending, partial, paid
    amount_paid = Column(Numeric(10, 2, asdecimal=False), default=0, nullable=False)
    couple_photo_url = Column(Text, nullable=True)
    invite_message = Column(Text, nullable=True)
    invite_image_url = Column(Text, nullable=True)
    contract_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    guests = relationship("Guest", back_populates="booking", cascade="all, delete-orphan")
    guest_groups = relationship(
        "GuestGroup", back_populates="booking", cascade="all, delete-orphan"
    )
    stages = relationship("BookingStage", back_populates="booking", cascade="all, delete-orphan")
    messages = relationship("Message", back_populates="booking", cascade="all, delete-orphan")
    questionnaire_responses = relationship(
        "QuestionnaireResponse", back_populates="booking", cascade="all, delete-orphan"
    )


class AvailabilityEvent(Base):
    __tablename__ = "availability"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    is_all_day = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class GalleryItem(Base):
    __tablename__ = "galleries"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(Text, nullable=False)  # Public blob URL
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    icon_name = Column(String(255), nullable=True)


class AddonCategory(Base):
    __tablename__ = "addon_categories"

    addon_id = Column(Integer, ForeignKey("addons.id", ondelete="CASCADE"), primary_key=True)
    category_id = Column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True
    )


class Addon(Base):
    __tablename__ = "addons"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    category_links = relationship("AddonCategory", cascade="all, delete-orphan")
    package_links = relationship(
        "PackageAddon", back_populates="addon", cascade="all, delete-orphan"
    )

    @property
    def category_ids(self) -> list[int]:
        return sorted(link.category_id for link in self.category_links)


class Package(Base):
    __tablename__ = "packages"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    is_published = Column(Boolean, default=False, nullable=False)
    rich_description = Column(Text, nullable=True)
    rich_description_image_url = Column(Text, nullable=True)

    category = relationship("Category")
    addon_links = relationship(
        "PackageAddon", back_populates="package", cascade="all, delete-orphan"
    )


class PackageAddon(Base):
    __tablename__ = "package_addons"

    package_id = Column(Integer, ForeignKey("packages.id", ondelete="CASCADE"), primary_key=True)
    addon_id = Column(Integer, ForeignKey("addons.id", ondelete="CASCADE"), primary_key=True)
    # Bundled into the package; the customer cannot remove it in the calculator
    is_locked = Column(Boolean, default=True, nullable=False)

    package = relationship("Package", back_populates="addon_links")
    addon = relationship("Addon", back_populates="package_links")


class DiscountCode(Base):
    __tablename__ = "discount_codes"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(255), unique=True, index=True, nullable=False)
    type = Column(String(50), nullable=False)  # percentage, fixed
    value = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    usage_limit = Column(Integer, nullable=True)
    times_used = Column(Integer, default=0, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class ProductionStage(Base):
    __tablename__ = "production_stages"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    booking_stages = relationship("BookingStage", back_populates="stage")


class BookingStage(Base):
    __tablename__ = "booking_stages"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False)
    stage_id = Column(Integer, ForeignKey("production_stages.id"), nullable=False)
    # pending, in_progress, awaiting_approval, completed
    status = Column(String(50), default="pending", nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    booking = relationship("Booking", back_populates="stages")
    stage = relationship("ProductionStage", back_populates="booking_stages")


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False)
    sender = Column(String(50), nullable=False)  # client, admin
    content = Column(Text, nullable=True)
    attachment_url = Column(Text, nullable=True)
    attachment_type = Column(String(100), nullable=True)
    is_read_by_admin = Column(Boolean, default=False, nullable=False)
    is_read_by_client = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    booking = relationship("Booking", back_populates="messages")


class GuestGroup(Base):
    __tablename__ = "guest_groups"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)

    booking = relationship("Booking", back_populates="guest_groups")
    # Deleting a group detaches its guests (group_id -> NULL)
    guests = relationship("Guest", back_populates="group")


class Guest(Base):
    __tablename__ = "guests"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    group_id = Column(Integer, ForeignKey("guest_groups.id", ondelete="SET NULL"), nullable=True)
    rsvp_status = Column(String(50), default="pending", nullable=False)  # pending, confirmed, declined
    rsvp_token = Column(
        String(36), unique=True, index=True, default=generate_rsvp_token, nullable=False
    )
    notes = Column(Text, nullable=True)
    allowed_companions = Column(Integer, default=0, nullable=False)
    companion_status = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    booking = relationship("Booking", back_populates="guests")
    group = relationship("GuestGroup", back_populates="guests")

    @property
    def group_name(self):
        return self.group.name if self.group else None


class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(255), nullable=True)
    subject = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class AppSetting(Base):
    __tablename__ = "app_settings"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=True)


class PasswordResetToken(Base):
    __tablename__ = "password_reset_tokens"

    email = Column(String(255), primary_key=True)
    token_hash = Column(String(64), nullable=False)  # sha256 hex of the emailed token
    expires_at = Column(DateTime(timezone=True), nullable=False)


# ============================================================================
# QUESTIONNAIRES
# ============================================================================


class QuestionnaireTemplate(Base):
    __tablename__ = "questionnaire_templates"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)  # Assigned to every new booking

    questions = relationship(
        "Question",
        back_populates="template",
        cascade="all, delete-orphan",
        order_by=lambda: (Question.sort_order, Question.id),
    )
    responses = relationship(
        "QuestionnaireResponse", back_populates="template", cascade="all, delete-orphan"
    )


class Question(Base):
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(
        Integer, ForeignKey("questionnaire_templates.id", ondelete="CASCADE"), nullable=False
    )
    text = Column(Text, nullable=False)
    type = Column(String(50), nullable=False)  # text, yes_no, link
    sort_order = Column(Integer, default=0, nullable=False)

    template = relationship("QuestionnaireTemplate", back_populates="questions")
    answers = relationship("Answer", back_populates="question", cascade="all, delete-orphan")


class QuestionnaireResponse(Base):
    __tablename__ = "questionnaire_responses"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False)
    template_id = Column(
        Integer, ForeignKey("questionnaire_templates.id", ondelete="CASCADE"), nullable=False
    )
    status = Column(String(50), default="pending", nullable=False)  # pending, submitted
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    booking = relationship("Booking", back_populates="questionnaire_responses")
    template = relationship("QuestionnaireTemplate", back_populates="responses")
    answers = relationship("Answer", back_populates="response", cascade="all, delete-orphan")


class Answer(Base):
    __tablename__ = "answers"
    __table_args__ = (UniqueConstraint("response_id", "question_id"),)

    id = Column(Integer, primary_key=True, index=True)
    response_id = Column(
        Integer, ForeignKey("questionnaire_responses.id", ondelete="CASCADE"), nullable=False
    )
    question_id = Column(Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False)
    answer_text = Column(Text, nullable=True)

    response = relationship("QuestionnaireResponse", back_populates="answers")
    question = relationship("Question", back_populates="answers")


# ============================================================================
# FILMS & HOMEPAGE CONTENT
# ============================================================================


class Film(Base):
    __tablename__ = "films"

    id = Column(Integer, primary_key=True, index=True)
    youtube_url = Column(Text, nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    thumbnail_url = Column(Text, nullable=True)  # Derived from the YouTube video ID
    sort_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class HomepageSlide(Base):
    __tablename__ = "homepage_slides"

    id = Column(Integer, primary_key=True, index=True)
    image_url = Column(Text, nullable=False)
    title = Column(String(255), nullable=True)
    subtitle = Column(String(255), nullable=True)
    button_text = Column(String(255), nullable=True)
    button_link = Column(String(255), nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)


class HomepageTestimonial(Base):
    __tablename__ = "homepage_testimonials"

    id = Column(Integer, primary_key=True, index=True)
    author = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)


class HomepageInstagramPost(Base):
    __tablename__ = "homepage_instagram"

    id = Column(Integer, primary_key=True, index=True)
    post_url = Column(Text, nullable=False)
    image_url = Column(Text, nullable=False)
    caption = Column(Text, nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)
