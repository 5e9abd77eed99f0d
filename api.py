"""
Flask REST API for NeonCalc
Exposes the compute service and calculation history as JSON endpoints
"""
import logging

from flask import Flask, jsonify, request
from flask_cors import CORS

import config
from compute_service import ComputeService
from database import Database
from errors import DivisionByZero, InvalidOperand
from history_manager import HistoryManager

logger = logging.getLogger(__name__)

OPERATIONS = ("add", "subtract", "multiply", "divide")


def _error(message, status):
    return jsonify({'success': False, 'error': message}), status


def create_app(history_manager=None):
    """Build the Flask app around a history manager"""
    if history_manager is None:
        history_manager = HistoryManager(Database())
    service = ComputeService(history_manager)

    app = Flask(__name__)
    CORS(app)  # Enable CORS for all routes
    app.config['COMPUTE_SERVICE'] = service

    @app.route('/api')
    def api_info():
        """API information page"""
        items = "\n".join(
            f'            <li>POST /api/{name} - {{"x": int, "y": int}}</li>' for name in OPERATIONS
        )
        return f"""
    <html>
    <head><title>{config.APP_NAME} API</title></head>
    <body style="font-family: monospace; padding: 40px; background: #1E1E1E; color: #9BFF9B;">
        <h1>{config.APP_NAME} API Server</h1>
        <h2>Available Endpoints:</h2>
        <ul>
{items}
            <li><a href="/api/history" style="color: #4DE07A;">GET /api/history?days=7</a> - Calculation history</li>
            <li>DELETE /api/history - Clear history</li>
            <li><a href="/api/health" style="color: #4DE07A;">GET /api/health</a> - Service status</li>
        </ul>
    </body>
    </html>
    """

    @app.route('/api/health')
    def health():
        """Service status"""
        return jsonify({
            'success': True,
            'data': {'status': 'ok', 'app': config.APP_NAME, 'version': config.VERSION}
        })

    @app.route('/api/<operation>', methods=['POST'])
    def compute(operation):
        """Run one two-operand integer operation"""
        if operation not in OPERATIONS:
            return _error(f"Unknown operation: {operation}", 404)
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return _error("Request body must be a JSON object", 400)
        try:
            data = getattr(service, operation)(payload.get('x'), payload.get('y'))
        except (InvalidOperand, DivisionByZero) as e:
            logger.warning("Rejected %s %s: %s", operation, payload, e)
            return _error(str(e), 400)
        except Exception as e:
            logger.exception("Operation %s failed", operation)
            return _error(str(e), 500)
        return jsonify({'success': True, 'data': data})

    @app.route('/api/history', methods=['GET'])
    def get_history():
        """Get calculation history, newest first"""
        days = request.args.get('days')
        try:
            days = int(days) if days is not None else None
        except ValueError:
            return _error("days must be an integer", 400)
        try:
            history = service.get_history(days)
        except Exception as e:
            logger.exception("Reading history failed")
            return _error(str(e), 500)

        formatted = [{'expression': expr, 'result': result} for expr, result in history]
        return jsonify({
            'success': True,
            'data': formatted,
            'count': len(formatted)
        })

    @app.route('/api/history', methods=['DELETE'])
    def clear_history():
        """Clear calculation history"""
        try:
            service.clear_history()
        except Exception as e:
            logger.exception("Clearing history failed")
            return _error(str(e), 500)
        return jsonify({'success': True})

    return app


def main():
    config.setup_logging()
    print("\n" + "="*60)
    print(f"{config.APP_NAME} API Server")
    print("="*60)
    print(f"Server starting on http://{config.WEB_HOST}:{config.WEB_PORT}")
    print(f"Access from this device: http://localhost:{config.WEB_PORT}/api")
    print("="*60 + "\n")

    app = create_app()
    app.run(host=config.WEB_HOST, port=config.WEB_PORT, debug=False)


if __name__ == '__main__':
    main()
