import json
import logging
import re

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```json|```")


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text or "").strip()


def parse_structured(raw: str, shape: type[BaseModel], field: str) -> dict:
    """Parse model output into ``shape``, or fall back to ``{field: raw}``.

    Model output is not guaranteed to be well-formed JSON, so a parse or shape
    mismatch is not an error: the raw text is returned under the field the
    structured payload would have used.
    """
    try:
        data = json.loads(strip_code_fences(raw))
        parsed = shape.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        logger.debug("Structured %s output not parseable, returning raw text: %s", field, e)
        return {field: raw}
    return parsed.model_dump(by_alias=True, exclude_none=True)
