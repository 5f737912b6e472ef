"""
Meal Suggestion Service

Asks an external text-generation service for dinner ideas. The service is
best effort: any failure is logged and turned into an empty list so the
caller can fall back to the curated meals.
"""

import json
import logging
import re

import requests

from constants import CURATED_MEALS, VALID_DIFFICULTIES, MAX_LENGTHS
from utils.sanitizer import sanitize_external_text

from .errors import ExternalServiceError

logger = logging.getLogger(__name__)

SUGGESTION_COUNT = 4

FALLBACK_NOTICE = "Couldn't load AI picks, showing curated classics below."

# Markdown code fences the model sometimes wraps its JSON in
_FENCE_MARKERS = re.compile(r'```(?:json|JSON)?')

# Accepted spellings for each output field
_FIELD_ALIASES = {
    'name': ('name',),
    'emoji': ('emoji',),
    'desc': ('desc', 'description'),
    'kid_tip': ('kidTip', 'kid_tip'),
    'prep_time': ('prepTime', 'prep_time'),
    'difficulty': ('difficulty', 'diff'),
}

PROMPT_TEMPLATE = (
    "Suggest {count} Sunday dinner ideas for: 6 adults, 5 kids aged 1-6 "
    "(soft textures, mild, no choking hazards). Season: {month}. Host: {host}.\n"
    "Return ONLY a valid JSON array of {count} objects, no markdown:\n"
    '[{{"name":"...","emoji":"...","desc":"...","kidTip":"...","prepTime":"...",'
    '"difficulty":"Easy|Medium|Involved","tags":["..."]}}]'
)


def build_prompt(host_name, month):
    return PROMPT_TEMPLATE.format(count=SUGGESTION_COUNT, month=month, host=host_name or 'rotating')


def _first(item, names):
    for name in names:
        if name in item:
            return item[name]
    return None


def _clean_suggestion(item):
    """Normalize one suggestion record, or return None if it is unusable."""
    if not isinstance(item, dict):
        return None

    limit = MAX_LENGTHS['suggestion_field']
    cleaned = {field: sanitize_external_text(_first(item, names), limit)
               for field, names in _FIELD_ALIASES.items()}
    if not cleaned['name']:
        return None
    if cleaned['difficulty'] not in VALID_DIFFICULTIES:
        cleaned['difficulty'] = ''

    tags = item.get('tags')
    if not isinstance(tags, list):
        tags = []
    cleaned['tags'] = [t for t in (sanitize_external_text(tag, 50) for tag in tags) if t]
    return cleaned


def parse_suggestions(text):
    """
    Parse the model's reply into suggestion records.

    Strips markdown fences and any prose around the JSON array, drops
    malformed entries and keeps at most SUGGESTION_COUNT.

    Raises:
        ExternalServiceError: No JSON array could be read from the text
    """
    if not isinstance(text, str):
        raise ExternalServiceError("Suggestion reply is not text")

    body = _FENCE_MARKERS.sub('', text).strip()
    start, end = body.find('['), body.rfind(']')
    if start == -1 or end < start:
        raise ExternalServiceError("Suggestion reply has no JSON array")

    try:
        items = json.loads(body[start:end + 1])
    except ValueError as e:
        raise ExternalServiceError(f"Suggestion reply is not valid JSON: {e}")
    if not isinstance(items, list):
        raise ExternalServiceError("Suggestion reply is not a JSON array")

    suggestions = [s for s in (_clean_suggestion(item) for item in items) if s]
    return suggestions[:SUGGESTION_COUNT]


def _reply_text(payload):
    """Concatenate the text blocks of a messages API response."""
    blocks = payload.get('content') if isinstance(payload, dict) else None
    if not isinstance(blocks, list):
        raise ExternalServiceError("Suggestion response has no content blocks")
    return ''.join(b.get('text') or '' for b in blocks if isinstance(b, dict))


def request_suggestions(host_name, month, api_key, api_url, model, timeout=20, max_tokens=1200):
    """
    Call the suggestion service once and return parsed suggestions.

    Raises:
        ExternalServiceError: Missing key, network failure or unusable reply
    """
    if not api_key:
        raise ExternalServiceError("No API key configured for meal suggestions")

    headers = {
        'content-type': 'application/json',
        'x-api-key': api_key,
        'anthropic-version': '2023-06-01',
    }
    body = {
        'model': model,
        'max_tokens': max_tokens,
        'messages': [{'role': 'user', 'content': build_prompt(host_name, month)}],
    }

    try:
        response = requests.post(api_url, headers=headers, json=body, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except requests.RequestException as e:
        raise ExternalServiceError(f"Suggestion request failed: {e}")
    except ValueError as e:
        raise ExternalServiceError(f"Suggestion response is not JSON: {e}")

    return parse_suggestions(_reply_text(payload))


def suggest_meals(host_name, month, api_key, api_url, model, timeout=20, max_tokens=1200):
    """
    Best-effort dinner ideas for a host and month.

    Never raises: returns [] when the service cannot be used. Calling it
    again is the refresh; there are no automatic retries.
    """
    try:
        suggestions = request_suggestions(host_name, month, api_key, api_url, model,
                                          timeout=timeout, max_tokens=max_tokens)
    except ExternalServiceError as e:
        logger.warning("Meal suggestions unavailable, using curated list: %s", e)
        return []

    logger.info("Received %d meal suggestions for %s (host %s)", len(suggestions), month, host_name or 'rotating')
    return suggestions


def curated_meals(filter_value='all'):
    """Curated meals matching a tag or difficulty ('all' returns everything)."""
    if not filter_value or filter_value == 'all':
        return list(CURATED_MEALS)
    return [m for m in CURATED_MEALS
            if filter_value in m.get('tags', []) or m.get('difficulty') == filter_value]
