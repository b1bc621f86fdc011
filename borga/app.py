import os
import logging
from flask import Flask, request, jsonify

from .config import config
from .errors import BorgaError, ErrorKind, InvalidQuery, MissingParameter, NotAuthorized
from .models import normalize_group_id
from .services import BorgaServices

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.CONFLICT: 409,
    ErrorKind.NOT_AUTHORIZED: 403,
    ErrorKind.NOT_AUTHENTICATED: 401,
    ErrorKind.UNAVAILABLE: 503,
    ErrorKind.INTERNAL_INCONSISTENCY: 500,
}


def create_app(config_name: str = None, services: BorgaServices = None) -> Flask:
    """Application factory for the Borga web API."""
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config.get(config_name, config['default']))

    # Store services on app for access in routes
    app.services = services or BorgaServices.from_config(app.config)

    register_error_handlers(app)
    register_api_routes(app)

    return app


def get_bearer_token():
    """Extract the token from an 'Authorization: Bearer <token>' header."""
    auth = request.headers.get('Authorization')
    if not auth:
        return None
    scheme, _, token = auth.strip().partition(' ')
    if scheme.lower() != 'bearer':
        return None
    return token.strip() or None


def register_error_handlers(app: Flask):

    @app.errorhandler(BorgaError)
    def handle_borga_error(err: BorgaError):
        status = STATUS_BY_KIND.get(err.kind, 500)
        if status >= 500:
            logger.error(f"{err.code}: {err.message}")
        return jsonify(err.to_dict()), status


def register_api_routes(app: Flask):
    """Register API routes."""
    services = app.services

    def current_user() -> str:
        return services.authenticate(get_bearer_token())

    def body() -> dict:
        return request.get_json(silent=True) or {}

    # ==================== Games (catalog) ====================

    @app.route('/api/v1/games', methods=['GET'])
    def api_search_games():
        """Search the catalog by exactly one of: top, id, name."""
        if 'top' in request.args:
            limit = request.args.get('top', type=int)
            if limit is None or limit < 1:
                raise InvalidQuery("'top' must be a positive integer")
            games = services.popular_games(limit)
            return jsonify([g.to_dict() for g in games])
        if 'id' in request.args:
            game = services.get_game_by_id(request.args['id'])
            return jsonify(game.to_dict())
        if 'name' in request.args:
            games = services.search_games_by_name(request.args['name'])
            return jsonify([g.to_dict() for g in games])
        raise InvalidQuery("Use one of the queries: top, id, name")

    # ==================== Groups ====================

    @app.route('/api/v1/groups', methods=['GET'])
    def api_list_groups():
        current_user()
        return jsonify(services.list_groups())

    @app.route('/api/v1/groups', methods=['POST'])
    def api_create_group():
        username = current_user()
        data = body()
        group_id = services.create_group(username, data.get('name'), data.get('description'))
        return jsonify({'id': group_id}), 201

    @app.route('/api/v1/groups/<group_id>', methods=['GET'])
    def api_get_group(group_id: str):
        current_user()
        return jsonify(services.get_group_details(normalize_group_id(group_id)))

    @app.route('/api/v1/groups/<group_id>', methods=['PUT'])
    def api_update_group(group_id: str):
        username = current_user()
        group_id = normalize_group_id(group_id)
        data = body()
        name = data.get('name')
        description = data.get('description')
        if name is None and description is None:
            raise MissingParameter("Provide a name and/or a description")
        group = services.update_group(username, group_id, name, description)
        return jsonify(group.to_dict())

    @app.route('/api/v1/groups/<group_id>', methods=['DELETE'])
    def api_delete_group(group_id: str):
        username = current_user()
        services.delete_group(username, normalize_group_id(group_id))
        return jsonify({'message': 'Group deleted'})

    # ==================== Group games ====================

    @app.route('/api/v1/groups/<group_id>/games', methods=['POST'])
    def api_add_game(group_id: str):
        username = current_user()
        group_id = normalize_group_id(group_id)
        game_id = body().get('id')
        if not game_id:
            raise MissingParameter("Game id is required")
        services.add_game_by_id(username, group_id, game_id)
        return jsonify(services.get_group(group_id).to_dict()), 201

    @app.route('/api/v1/groups/<group_id>/games/<game_id>', methods=['DELETE'])
    def api_remove_game(group_id: str, game_id: str):
        username = current_user()
        group_id = normalize_group_id(group_id)
        services.remove_game(username, group_id, game_id)
        return jsonify(services.get_group_details(group_id))

    # ==================== Users ====================

    @app.route('/api/v1/users', methods=['POST'])
    def api_register_user():
        username = body().get('username')
        if not username:
            raise MissingParameter("Username is required")
        token = services.register(username)
        return jsonify({'token': token}), 201

    @app.route('/api/v1/users/<username>', methods=['GET'])
    def api_get_user(username: str):
        return jsonify(services.get_user(username).to_dict())

    @app.route('/api/v1/users/<username>', methods=['DELETE'])
    def api_deregister_user(username: str):
        acting = current_user()
        services.get_user(username)
        if acting != username:
            raise NotAuthorized("Users can only delete themselves")
        services.deregister_user(username)
        return jsonify({'message': 'User deleted'})

    @app.route('/api/v1/users/<username>/groups', methods=['GET'])
    def api_user_groups(username: str):
        groups = services.list_user_groups(username)
        return jsonify([g.to_dict() for g in groups])

    @app.route('/api/v1/users/groups', methods=['POST'])
    def api_attach_group():
        username = current_user()
        group_id = body().get('id')
        if group_id is None:
            raise MissingParameter("Group id is required")
        services.attach_group(username, normalize_group_id(group_id))
        return jsonify(services.get_user(username).to_dict())

    @app.route('/api/v1/users/groups/<group_id>', methods=['DELETE'])
    def api_detach_group(group_id: str):
        username = current_user()
        services.detach_group(username, normalize_group_id(group_id))
        return jsonify(services.get_user(username).to_dict())

    # ==================== Health Check ====================

    @app.route('/health')
    def health_check():
        return jsonify({
            'status': 'healthy',
            'users': len(services.list_users()),
            'groups': len(services.list_groups()),
            'queue_depth': services.gate.depth,
        })
