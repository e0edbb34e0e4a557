# AUTO-GENERATED FROM openapi.yaml (Codebreaker 1.0.0) - DO NOT EDIT MANUALLY
"""Tests for Game."""

import pydantic
import pytest

from codebreaker.model.game import Game

PAYLOAD = {'id': 'Ks3Lq9xWQbW2NkqRf0pJ1A',
 'created': '2026-02-19T17:04:05Z',
 'pool': 'ABCDEF',
 'length': 4,
 'solved': False,
 'text': 'ABCD',
 'guesses': [{'id': '7mWq2cGdSx6vYb1HnT4r8A',
              'created': '2026-02-19T17:05:11Z',
              'text': 'ABCF',
              'exactMatches': 3,
              'nearMatches': 0,
              'solution': False}]}


def test_game_from_payload():
    instance = Game.model_validate(PAYLOAD)
    dumped = instance.model_dump(mode="json", by_alias=True, exclude_none=True)
    assert set(dumped) == {key for key, value in PAYLOAD.items() if value is not None}


def test_game_request_body_omits_read_only_fields():
    body = Game.model_validate(PAYLOAD).to_request_body()
    assert set(body) <= {"length", "pool"}


def test_game_builder_round_trip():
    instance = Game.model_validate(PAYLOAD)
    assert instance.to_builder().build() == instance


def test_game_is_immutable():
    instance = Game.model_validate(PAYLOAD)
    with pytest.raises(pydantic.ValidationError):
        instance.id = instance.id
