"""Flask status dashboard for a running LogManager."""

from flask import Flask, jsonify, request

from logspace.manager import LogManager
from logspace.models import format_entry


def create_dashboard_app(manager: LogManager) -> Flask:
    app = Flask(__name__)

    @app.route("/health")
    def health():
        return jsonify(status="ok", state=manager.state.value)

    @app.route("/stats")
    def stats():
        config = manager.config
        error_count, general_count = manager.snapshot_counts()
        aggregator = manager.aggregator
        return jsonify(
            state=manager.state.value,
            error_count=error_count,
            general_count=general_count,
            general_capacity=config.general_capacity,
            minimum_level=config.minimum_severity.label,
            categories=sorted(config.categories) if config.categories is not None else None,
            accepted=aggregator.accepted if aggregator else 0,
            rejected=aggregator.rejected if aggregator else 0,
        )

    @app.route("/errors")
    def errors():
        n = request.args.get("n", default=10, type=int)
        return jsonify(errors=[format_entry(e) for e in manager.store.recent_errors(n)])

    @app.route("/flush", methods=["POST"])
    def flush():
        result = manager.save_report()
        if result.ok:
            return jsonify(ok=True, path=result.path)
        return jsonify(ok=False, path=result.path, reason=result.reason), 500

    return app


def run_dashboard(app: Flask, port: int):
    """Run the Flask app (intended for use in a daemon thread)."""
    app.run(host="0.0.0.0", port=port, use_reloader=False)
