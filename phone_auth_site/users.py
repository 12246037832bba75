from __future__ import annotations

import os
import re


def default_user_data(phone: str) -> dict:
    """Profile defaults for accounts first created through a phone login."""
    domain = os.getenv("PHONE_AUTH_DEFAULT_EMAIL_DOMAIN", "phone.local")
    local_part = re.sub(r"\D", "", phone or "")
    if not local_part:
        return {"emailAddress": "", "firstName": "", "lastName": ""}
    return {"emailAddress": f"{local_part}@{domain}", "firstName": "", "lastName": ""}
