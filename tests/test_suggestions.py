"""Tests for the meal suggestion adapter."""

import json

import pytest
import requests

from services import suggestions
from services.errors import ExternalServiceError
from services.suggestions import (
    build_prompt, curated_meals, parse_suggestions, suggest_meals, SUGGESTION_COUNT,
)

IDEA = {
    'name': 'Taco Bar', 'emoji': '🌮', 'desc': 'Build your own.',
    'kidTip': 'Soft tortillas.', 'prepTime': '45 min', 'difficulty': 'Easy',
    'tags': ['fun', 'quick'],
}


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f'{self.status} error')

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


def _reply(text):
    return {'content': [{'type': 'text', 'text': text}]}


def _call(**overrides):
    kwargs = {'api_key': 'key', 'api_url': 'https://example.test/v1/messages', 'model': 'm'}
    kwargs.update(overrides)
    return suggest_meals('Rahul & Leena', 'November', **kwargs)


def test_parse_plain_json_array():
    [idea] = parse_suggestions(json.dumps([IDEA]))
    assert idea == {
        'name': 'Taco Bar', 'emoji': '🌮', 'desc': 'Build your own.',
        'kid_tip': 'Soft tortillas.', 'prep_time': '45 min', 'difficulty': 'Easy',
        'tags': ['fun', 'quick'],
    }


def test_parse_strips_fences_and_prose():
    text = 'Here you go!\n```json\n' + json.dumps([IDEA]) + '\n```\nEnjoy.'
    assert parse_suggestions(text)[0]['name'] == 'Taco Bar'


def test_parse_keeps_at_most_four():
    assert len(parse_suggestions(json.dumps([IDEA] * 7))) == SUGGESTION_COUNT


def test_parse_drops_malformed_records():
    items = [IDEA, 'not a record', {'emoji': '🍕'}, dict(IDEA, difficulty='Impossible', tags='fun')]
    parsed = parse_suggestions(json.dumps(items))
    assert len(parsed) == 2
    assert parsed[1]['difficulty'] == ''
    assert parsed[1]['tags'] == []


@pytest.mark.parametrize('text', ['no json here', '[not, valid', '{"name": "x"}', None])
def test_parse_rejects_unusable_text(text):
    with pytest.raises(ExternalServiceError):
        parse_suggestions(text)


def test_prompt_mentions_host_and_month():
    prompt = build_prompt(None, 'March')
    assert 'Host: rotating' in prompt
    assert 'Season: March' in prompt


def test_suggest_meals_success(monkeypatch):
    calls = []
    reply = _reply('```json\n' + json.dumps([IDEA, IDEA]) + '\n```')

    def fake_post(url, headers=None, **kwargs):
        calls.append((url, headers, kwargs['json']))
        return FakeResponse(reply)

    monkeypatch.setattr(suggestions.requests, 'post', fake_post)
    ideas = _call()
    assert len(ideas) == 2
    url, headers, body = calls[0]
    assert headers['x-api-key'] == 'key'
    assert 'Rahul & Leena' in body['messages'][0]['content']


@pytest.mark.parametrize('outcome', [
    requests.ConnectionError('offline'),
    FakeResponse({}, status=500),
    FakeResponse(ValueError('not json')),
    FakeResponse({'content': 'oops'}),
    FakeResponse(_reply('Sorry, I cannot help with that.')),
])
def test_suggest_meals_degrades_to_empty_list(monkeypatch, outcome):
    def fake_post(*args, **kwargs):
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(suggestions.requests, 'post', fake_post)
    assert _call() == []


def test_suggest_meals_without_key_skips_request(monkeypatch):
    def fake_post(*args, **kwargs):
        raise AssertionError('should not be called')

    monkeypatch.setattr(suggestions.requests, 'post', fake_post)
    assert _call(api_key='') == []


def test_curated_meals_filter_by_tag_or_difficulty():
    assert len(curated_meals('all')) == len(curated_meals(None))
    assert all('kid-staple' in m['tags'] for m in curated_meals('kid-staple'))
    assert all(m['difficulty'] == 'Involved' for m in curated_meals('Involved'))
    assert curated_meals('no-such-tag') == []
