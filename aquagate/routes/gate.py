# aquagate/routes/gate.py
from flask import Blueprint, request, jsonify

from aquagate.common.custom_exception import InvalidInputError
from aquagate.common.logger import get_logger
from aquagate.components.gate_engine import evaluate_gate
from aquagate.components.scope_classifier import evaluate_scope
from aquagate.components.turn_guard import TurnGuard

bp = Blueprint("gate", __name__)
logger = get_logger(__name__)

# Stateless; safe to share across requests and threads
_GUARD = TurnGuard()


def _read_payload():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise InvalidInputError("request body must be a JSON object")
    if "messages" not in payload:
        raise InvalidInputError("messages field required")
    return payload["messages"], payload.get("context")


def _bad_request(e: InvalidInputError):
    logger.warning(f"{request.path} rejected: {e}")
    return jsonify({"error": "Invalid input", "detail": str(e)}), 400


@bp.route("/api/scope", methods=["POST"])
def scope():
    """
    Body: {"messages": [{"role": "user", "content": "...", "imageUrl": "optional"}]}
    """
    try:
        messages, _ = _read_payload()
        return jsonify(evaluate_scope(messages).to_dict())
    except InvalidInputError as e:
        return _bad_request(e)
    except Exception as e:
        logger.exception("/api/scope failed: %s", e)
        return jsonify({"error": "Scope check failed", "detail": str(e)}), 500


@bp.route("/api/gate", methods=["POST"])
def gate():
    """
    Body:
      {
        "messages": [{"role": "user", "content": "how much chlorine should I add to my pool?"}],
        "context": {"declared_water_type": "pool", "known_volume_gallons": 15000}
      }
    """
    try:
        messages, context = _read_payload()
        return jsonify(evaluate_gate(messages, context).to_dict())
    except InvalidInputError as e:
        return _bad_request(e)
    except Exception as e:
        logger.exception("/api/gate failed: %s", e)
        return jsonify({"error": "Gate evaluation failed", "detail": str(e)}), 500


@bp.route("/api/turn", methods=["POST"])
def turn():
    """Scope check then input gate, in the order the chat handler must apply them."""
    try:
        messages, context = _read_payload()
        return jsonify(_GUARD.handle_turn(messages, context))
    except InvalidInputError as e:
        return _bad_request(e)
    except Exception as e:
        logger.exception("/api/turn failed: %s", e)
        return jsonify({"error": "Turn evaluation failed", "detail": str(e)}), 500
