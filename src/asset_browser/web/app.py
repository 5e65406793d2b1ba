"""Flask web application for the Game Asset Browser."""

import logging
from typing import Optional

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .blueprints.api import SESSION_EXTENSION, api_bp, get_session
from ..core.exceptions import AssetBrowserError, FileSystemError, ScanInProgressError, ValidationError
from ..core.session import AssetSession


def create_app(config=None, session: Optional[AssetSession] = None):
    """
    Create and configure the Flask application.

    Args:
        config: Configuration dictionary
        session: Session to serve; a fresh one is created when omitted

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)

    app.config.update({
        'SECRET_KEY': 'dev-key-change-in-production',
        'JSON_SORT_KEYS': False,
    })

    if config:
        app.config.update(config)

    app.extensions[SESSION_EXTENSION] = session or AssetSession()
    app.register_blueprint(api_bp, url_prefix='/api')

    if not app.debug and not app.testing:
        app.logger.setLevel(logging.INFO)
        app.logger.info('Game Asset Browser web API startup')

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Not found', 'message': 'API endpoint not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'error': 'Method not allowed', 'message': str(error)}), 405

    @app.errorhandler(ValidationError)
    def validation_error(error):
        return jsonify({'error': 'Validation error', 'message': str(error)}), 400

    @app.errorhandler(ScanInProgressError)
    def scan_in_progress(error):
        return jsonify({'error': 'Scan already in progress', 'message': str(error)}), 409

    @app.errorhandler(FileSystemError)
    def filesystem_error(error):
        app.logger.error(f'File System Error: {error}', exc_info=True)
        return jsonify({'error': 'File system error', 'message': str(error)}), 400

    @app.errorhandler(AssetBrowserError)
    def application_error(error):
        app.logger.error(f'Application Error: {error}', exc_info=True)
        return jsonify({'error': 'Application error', 'message': str(error)}), 400

    @app.errorhandler(Exception)
    def unexpected_error(error):
        if isinstance(error, HTTPException):
            return jsonify({'error': error.name, 'message': error.description}), error.code
        app.logger.error(f'Unexpected Error: {error}', exc_info=True)
        return jsonify({
            'error': 'Unexpected error',
            'message': 'An unexpected error occurred'
        }), 500

    return app
