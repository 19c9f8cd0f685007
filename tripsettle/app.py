# tripsettle/app.py
import logging
from logging.config import dictConfig

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from tripsettle.config import DefaultConfig, logging_config
from tripsettle.models import InvalidPayload, parse_expenses, parse_members
from tripsettle.settlement import describe_transfers, settle

logger = logging.getLogger(__name__)


def error_response(code, message, status):
    return jsonify({'success': False, 'error': {'code': code, 'message': message}}), status


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(DefaultConfig)
    app.config.from_prefixed_env('TRIPSETTLE')
    if test_config:
        app.config.update(test_config)

    dictConfig(logging_config(app.config['LOG_LEVEL']))
    CORS(app, origins=app.config['CORS_ORIGINS'])  # Allows the React frontend to talk to this backend

    @app.errorhandler(InvalidPayload)
    def invalid_payload(exc):
        logger.info('Rejected payload: %s', exc)
        return error_response('invalid_payload', str(exc), 400)

    @app.errorhandler(Exception)
    def unhandled(exc):
        if isinstance(exc, HTTPException):
            return exc
        logger.exception('Unhandled exception on %s', request.path)
        return error_response('internal_error', 'An unexpected error occurred. Please try again later.', 500)

    @app.route('/api', methods=['GET'])
    def health_check():
        return jsonify({'status': 'healthy', 'message': 'Backend is running!'})

    @app.route('/api/calculate', methods=['POST'])
    def calculate():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise InvalidPayload('Request body must be a JSON object.')

        # Convert JSON data into our Python objects
        members = parse_members(data.get('members', []))
        expenses = parse_expenses(data.get('expenses', []))

        result = settle(members, expenses)
        logger.info('Settled %d members, %d expenses -> %d transfers',
                    len(members), len(expenses), len(result.transactions))

        body = result.to_dict()
        body['summary'] = describe_transfers(result.transactions, app.config['CURRENCY_SYMBOL'])
        return jsonify(body)

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(host=app.config['HOST'], port=app.config['PORT'], debug=app.config['DEBUG'])
