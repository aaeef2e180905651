import logging
import random
import re
import string
from typing import Any, Awaitable, Callable, Optional

from pydantic import HttpUrl, TypeAdapter, ValidationError

from config import CODE_LENGTH, MAX_ALLOCATION_ATTEMPTS
from errors import AllocationExhausted, CodeTaken, InvalidCodeFormat, InvalidUrl
from models import Link

logger = logging.getLogger(__name__)

ALPHABET = string.ascii_letters + string.digits
CODE_PATTERN = re.compile(r"[A-Za-z0-9]{6,8}")
http_url_adapter = TypeAdapter(HttpUrl)


def validate_code(candidate) -> bool:
    return isinstance(candidate, str) and CODE_PATTERN.fullmatch(candidate) is not None


def validate_url(candidate) -> bool:
    if not candidate or not isinstance(candidate, str):
        return False
    try:
        url = http_url_adapter.validate_python(candidate)
    except ValidationError:
        return False
    return url.scheme in ("http", "https") and bool(url.host)


def generate_code(length: int = CODE_LENGTH) -> str:
    return ''.join(random.choices(ALPHABET, k=length))


def _code_supplied(custom_code: Any) -> bool:
    return custom_code is not None and custom_code != ""


async def allocate_code(store, custom_code: Any = None,
                        max_attempts: int = MAX_ALLOCATION_ATTEMPTS,
                        insert: Optional[Callable[[str], Awaitable[Any]]] = None):
    """Pick the code for a new link.

    A custom code is only format-checked; whether it is free is decided by the
    unique constraint when the row is inserted. Generated codes are probed
    against the store and redrawn on collision, ``max_attempts`` times at most.

    With ``insert`` given, the chosen code is handed to it and its result is
    returned. A ``CodeTaken`` from inserting a generated code uses up one
    attempt; for a custom code it propagates.
    """
    if _code_supplied(custom_code):
        if not validate_code(custom_code):
            raise InvalidCodeFormat()
        return await insert(custom_code) if insert else custom_code
    for attempt in range(1, max_attempts + 1):
        code = generate_code()
        if await store.code_exists(code):
            logger.warning("Generated code %s already in use (attempt %d/%d)", code, attempt, max_attempts)
            continue
        if insert is None:
            return code
        try:
            return await insert(code)
        except CodeTaken:
            logger.warning("Generated code %s taken on insert (attempt %d/%d)", code, attempt, max_attempts)
    raise AllocationExhausted(max_attempts)


async def create_link(store, url: Any, custom_code: Any = None,
                      max_attempts: int = MAX_ALLOCATION_ATTEMPTS) -> Link:
    if not validate_url(url):
        raise InvalidUrl()
    # the caller's string is stored as given, not the normalized HttpUrl
    return await allocate_code(store, custom_code, max_attempts,
                               insert=lambda code: store.create(code, url))
