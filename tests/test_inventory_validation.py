from __future__ import annotations

import pytest

from ledgerx_client_sdk import validate_transfer_payload
from ledgerx_client_sdk.inventory_validation import BRANCH_REQUIRED_MESSAGE, SAME_BRANCH_MESSAGE


def _transfer(**overrides):
    payload = {"producto_id": 7, "origen_id": 1, "destino_id": 2, "cantidad": "3", "generar_guia": False}
    payload.update(overrides)
    return payload


@pytest.mark.parametrize(
    ("origen", "destino"),
    [(2, 2), ("2", 2), (2, "2"), (" 2 ", "2"), (0, 0), ("0", 0)],
)
def test_same_branch_is_rejected_whatever_the_id_type(origen, destino) -> None:
    result = validate_transfer_payload(_transfer(origen_id=origen, destino_id=destino))
    assert result.ok is False
    assert result.summary == SAME_BRANCH_MESSAGE


@pytest.mark.parametrize(("origen", "destino"), [(None, 2), ("", 2), ("norte", 2), (1, None)])
def test_missing_or_invalid_branch_is_required(origen, destino) -> None:
    result = validate_transfer_payload(_transfer(origen_id=origen, destino_id=destino))
    assert result.ok is False
    assert BRANCH_REQUIRED_MESSAGE in [issue.reason for issue in result.issues]


def test_distinct_string_ids_pass() -> None:
    assert validate_transfer_payload(_transfer(origen_id="1", destino_id="2")).ok is True
