# aquagate/application.py
import datetime

from flask import Flask, jsonify

from aquagate.common.logger import get_logger
from aquagate.config.config import MAX_CONTENT_LENGTH
from aquagate.routes.gate import bp as gate_bp

logger = get_logger(__name__)

# Flask app
app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = MAX_CONTENT_LENGTH
app.register_blueprint(gate_bp)

# Health and uptime
START_TIME = datetime.datetime.now(datetime.timezone.utc)


@app.route("/health", methods=["GET"])
def health():
    now = datetime.datetime.now(datetime.timezone.utc)
    return jsonify({
        "status": "ok",
        "uptime_seconds": int((now - START_TIME).total_seconds()),
        "timestamp": now.isoformat()
    })


logger.info("Aquatics gate service initialized")
