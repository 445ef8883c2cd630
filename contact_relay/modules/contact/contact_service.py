from contact_relay.common.config import Settings
from contact_relay.common.utils.email_service import (
    EmailSendResult,
    OutboundEmailPayload,
    ResendClient,
    render_template,
)
from contact_relay.common.utils.global_messages import GlobalMessages
from contact_relay.modules.contact.schemas import ContactSubmission

CONTACT_TAGS = [{"name": "form", "value": "contact"}]


def build_subject(submission: ContactSubmission) -> str:
    if submission.service:
        return GlobalMessages.CONTACT_SUBJECT_WITH_SERVICE.format(
            name=submission.name, service=submission.service
        )
    return GlobalMessages.CONTACT_SUBJECT.format(name=submission.name)


def build_contact_email(submission: ContactSubmission, settings: Settings) -> OutboundEmailPayload:
    """
    Render a validated submission into the message sent to the site owner.

    Sender and recipient always come from settings; replies go straight
    back to the person who filled in the form.
    """
    context = submission.model_dump()
    return OutboundEmailPayload(
        from_email=settings.FROM_EMAIL,
        to=[settings.TO_EMAIL],
        reply_to=submission.email,
        subject=build_subject(submission),
        html=render_template("contact.html", context),
        text=render_template("contact.txt", context),
        tags=list(CONTACT_TAGS),
    )


async def process_contact_form(
    submission: ContactSubmission,
    settings: Settings,
    email_client: ResendClient,
) -> EmailSendResult:
    payload = build_contact_email(submission, settings)
    return await email_client.send(payload)
