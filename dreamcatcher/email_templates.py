"""
MJML Email Templates
Polish transactional emails sent to couples, their guests and the studio
"""

from html import escape
from typing import Optional

THEME = {
    "primary": "#4F46E5",
    "background": "#f8fafc",
    "text_primary": "#0f172a",
    "text_secondary": "#334155",
    "text_muted": "#64748b",
    "border": "#e2e8f0",
}

BRAND_NAME = "Dreamcatcher Film"


def get_base_template(
    title: str,
    preview_text: str,
    content_sections: str,
    cta_url: Optional[str] = None,
    cta_label: Optional[str] = None,
    header_html: str = "",
) -> str:
    """Base MJML template wrapper for all emails"""

    cta_section = ""
    if cta_url and cta_label:
        cta_section = f"""
        <mj-section background-color="#ffffff" padding="0 40px 40px 40px">
          <mj-column>
            <mj-button
              href="{escape(cta_url, quote=True)}"
              background-color="{THEME['primary']}"
              color="#ffffff"
              font-weight="600"
              border-radius="5px"
              padding="10px 0">
              {escape(cta_label)}
            </mj-button>
          </mj-column>
        </mj-section>
        """

    return f"""
    <mjml>
      <mj-head>
        <mj-title>{escape(title)}</mj-title>
        <mj-preview>{escape(preview_text)}</mj-preview>
        <mj-attributes>
          <mj-all font-family="Arial, sans-serif" />
          <mj-text font-size="16px" line-height="1.6" color="{THEME['text_secondary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="{THEME['background']}">
        {header_html}
        <mj-section background-color="#ffffff" padding="40px 40px 16px 40px">
          <mj-column>
            <mj-text font-size="24px" font-weight="600" color="{THEME['text_primary']}" padding="0 0 16px 0">
              {escape(title)}
            </mj-text>
            {content_sections}
          </mj-column>
        </mj-section>

        {cta_section}

        <mj-section padding="24px 20px">
          <mj-column>
            <mj-text align="center" font-size="13px" color="#94a3b8" padding="0">
              {BRAND_NAME}
            </mj-text>
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """


def _paragraphs(*lines: str) -> str:
    return "\n".join(f"<mj-text>{line}</mj-text>" for line in lines)


def booking_confirmation_template(booking_id: int, client_id: str, login_url: str) -> str:
    content = _paragraphs(
        "Twoje konto w panelu klienta zostało utworzone.",
        f"<strong>Numer rezerwacji:</strong> #{booking_id}",
        f"<strong>Numer klienta (login):</strong> {escape(client_id)}",
        "<strong>Hasło:</strong> [ustawione podczas rezerwacji]",
        "Możesz zalogować się na naszej stronie, aby śledzić postępy.",
    )
    return get_base_template(
        title="Dziękujemy za rezerwację!",
        preview_text=f"Twój numer klienta: {client_id}",
        content_sections=content,
        cta_url=login_url,
        cta_label="Przejdź do panelu klienta",
    )


def credentials_reminder_template(client_id: str, login_url: str) -> str:
    content = _paragraphs(
        "Cześć,",
        "poniżej przypominamy Twoje dane do logowania do panelu klienta:",
        f"<strong>Numer klienta (login):</strong> {escape(client_id)}",
        "<strong>Hasło:</strong> [ustawione podczas rezerwacji]",
        "Jeśli nie pamiętasz hasła, możesz je zresetować na stronie logowania.",
    )
    return get_base_template(
        title="Twoje dane logowania",
        preview_text="Dane logowania do panelu klienta",
        content_sections=content,
        cta_url=login_url,
        cta_label="Zaloguj się",
    )


def password_reset_template(reset_link: str) -> str:
    content = _paragraphs(
        "Otrzymaliśmy prośbę o zresetowanie hasła do Twojego konta w Panelu Klienta.",
        "Kliknij poniższy link, aby ustawić nowe hasło. Link jest ważny przez 30 minut.",
        "Jeśli to nie Ty prosiłeś/aś o zmianę, zignoruj tę wiadomość.",
    )
    return get_base_template(
        title="Reset hasła",
        preview_text="Ustaw nowe hasło do panelu klienta",
        content_sections=content,
        cta_url=reset_link,
        cta_label="Zresetuj hasło",
    )


def couple_label(bride_name: Optional[str], groom_name: Optional[str]) -> str:
    return " i ".join(name for name in (bride_name, groom_name) if name) or "Para Młoda"


def new_message_template(
    bride_name: Optional[str], groom_name: Optional[str], login_url: str
) -> str:
    content = _paragraphs(
        f"Cześć {escape(couple_label(bride_name, groom_name))},",
        "Otrzymaliście nową wiadomość w panelu klienta. "
        "Możecie ją odczytać, logując się na naszej stronie.",
    )
    return get_base_template(
        title="Nowa wiadomość",
        preview_text=f"Nowa wiadomość od {BRAND_NAME}",
        content_sections=content,
        cta_url=login_url,
        cta_label="Przejdź do panelu klienta",
    )


def new_stage_template(
    bride_name: Optional[str], groom_name: Optional[str], stage_name: str, login_url: str
) -> str:
    content = _paragraphs(
        f"Cześć {escape(couple_label(bride_name, groom_name))},",
        f"W Waszym projekcie pojawił się nowy etap: <strong>{escape(stage_name)}</strong>. "
        "Zalogujcie się do panelu klienta, aby zobaczyć szczegóły.",
    )
    return get_base_template(
        title="Nowy etap projektu",
        preview_text=f"Nowy etap: {stage_name}",
        content_sections=content,
        cta_url=login_url,
        cta_label="Przejdź do panelu klienta",
    )


def guest_invite_template(
    guest_name: str,
    bride_name: Optional[str],
    groom_name: Optional[str],
    rsvp_url: str,
    invite_message: Optional[str] = None,
    invite_image_url: Optional[str] = None,
) -> str:
    couple = couple_label(bride_name, groom_name)

    header_html = ""
    if invite_image_url:
        header_html = f"""
        <mj-section background-color="#ffffff" padding="0">
          <mj-column>
            <mj-image src="{escape(invite_image_url, quote=True)}" alt="Zaproszenie" padding="0" />
          </mj-column>
        </mj-section>
        """

    lines = []
    if invite_message:
        lines.append(escape(invite_message).replace("\n", "<br>"))
    lines.append(
        "Zapraszamy Cię serdecznie na nasz ślub. "
        "Prosimy o potwierdzenie przybycia, klikając w poniższy link:"
    )
    lines.append(f"Pozdrawiamy,<br>{escape(couple)}")

    return get_base_template(
        title=f"Cześć {guest_name}!",
        preview_text=f"Zaproszenie na ślub {couple}",
        content_sections=_paragraphs(*lines),
        cta_url=rsvp_url,
        cta_label="Potwierdź przybycie",
        header_html=header_html,
    )


def contact_notification_template(
    first_name: str, last_name: str, email: str, phone: Optional[str], message: str
) -> str:
    content = _paragraphs(
        f"<strong>Od:</strong> {escape(first_name)} {escape(last_name)} ({escape(email)})",
        f"<strong>Telefon:</strong> {escape(phone) if phone else 'Nie podano'}",
        escape(message).replace("\n", "<br>"),
    )
    return get_base_template(
        title="Nowa wiadomość z formularza",
        preview_text=f"Wiadomość od {first_name} {last_name}",
        content_sections=content,
    )


def questionnaire_submitted_template(
    bride_name: Optional[str], groom_name: Optional[str], booking_id: int
) -> str:
    couple = couple_label(bride_name, groom_name)
    content = _paragraphs(
        f"Para {escape(couple)} zatwierdziła swoje odpowiedzi w ankiecie.",
        f"<strong>Numer rezerwacji:</strong> #{booking_id}",
        "Możesz je teraz przejrzeć w panelu administratora.",
    )
    return get_base_template(
        title="Ankieta została wypełniona",
        preview_text=f"Para {couple} wypełniła ankietę",
        content_sections=content,
    )
