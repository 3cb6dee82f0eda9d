"""Newsletter subscription endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, status
from fastapi.responses import HTMLResponse
from jinja2 import Template
from pydantic import BaseModel, EmailStr

from app.api.deps import subscription_store
from app.config import settings
from app.core.email import send_welcome_email
from app.core.errors import NotFoundError, ValidationError
from app.core.newsletter import SubscriptionStore

logger = logging.getLogger(__name__)

router = APIRouter()


UNSUBSCRIBED_PAGE = """
<!DOCTYPE html>
<html>
<head>
    <title>Unsubscribed - {{ site_name }}</title>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <style>
        body { font-family: system-ui, -apple-system, sans-serif; background: #0a0a0a; color: #f5f5f5;
               display: flex; align-items: center; justify-content: center; min-height: 100vh; margin: 0; padding: 20px; }
        .container { background: #171717; border: 1px solid #404040; border-radius: 12px; padding: 40px;
                     max-width: 500px; text-align: center; }
        h1 { color: #fb923c; margin-top: 0; }
        p { color: #a3a3a3; line-height: 1.6; }
        a { color: #fb923c; text-decoration: none; }
        a:hover { text-decoration: underline; }
    </style>
</head>
<body>
    <div class="container">
        <h1>&#10003; Successfully Unsubscribed</h1>
        <p>You have been unsubscribed from the {{ site_name }} newsletter.</p>
        <p>We're sorry to see you go! If you change your mind, you can always subscribe again on our website.</p>
        <p><a href="/">Return to {{ site_name }}</a></p>
    </div>
</body>
</html>
"""


class SubscribeRequest(BaseModel):
    email: EmailStr
    source: Optional[str] = None


class UnsubscribeRequest(BaseModel):
    email: Optional[EmailStr] = None
    token: str


def _unsubscribe(store: SubscriptionStore, token: str, email: Optional[str]):
    if email:
        subscription = store.unsubscribe_email(email, token)
    else:
        subscription = store.unsubscribe_by_token(token)

    if subscription is None:
        raise NotFoundError("Invalid unsubscribe token or email not found")
    return subscription


@router.post("/subscribe", status_code=status.HTTP_201_CREATED)
def subscribe(
    payload: SubscribeRequest,
    background_tasks: BackgroundTasks,
    store: SubscriptionStore = Depends(subscription_store),
):
    """Subscribe an email; the welcome email goes out after the response."""
    subscription = store.add_subscription(payload.email, payload.source)
    background_tasks.add_task(send_welcome_email, subscription.email, subscription.unsubscribe_token)

    return {
        "success": True,
        "message": "Successfully subscribed to newsletter",
        "subscription": {
            "email": subscription.email,
            "subscribedAt": subscription.subscribed_at.isoformat(),
        },
    }


@router.post("/unsubscribe")
def unsubscribe(payload: UnsubscribeRequest, store: SubscriptionStore = Depends(subscription_store)):
    """Unsubscribe with token, plus email when available."""
    _unsubscribe(store, payload.token, payload.email)
    return {"success": True, "message": "Successfully unsubscribed from newsletter"}


@router.get("/unsubscribe", response_class=HTMLResponse)
def unsubscribe_link(
    token: Optional[str] = None,
    email: Optional[str] = None,
    store: SubscriptionStore = Depends(subscription_store),
):
    """Target of the unsubscribe link in emails."""
    if not token:
        raise ValidationError("Unsubscribe token is required", [{"path": "token", "message": "Field required"}])

    _unsubscribe(store, token, email)
    return HTMLResponse(Template(UNSUBSCRIBED_PAGE, autoescape=True).render(site_name=settings.site_name))
