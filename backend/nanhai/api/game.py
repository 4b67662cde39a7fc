from flask import Blueprint, jsonify, request, current_app
from nanhai.errors import GameError
from nanhai.services.game import get_engine

game = Blueprint('game', __name__)


@game.errorhandler(GameError)
def handle_game_error(exc: GameError):
    if exc.status_code >= 500:
        current_app.logger.error(f"[api] {request.path} failed: {exc.__class__.__name__}")
    return jsonify(exc.to_dict()), exc.status_code


@game.route('/new-player', methods=['POST'])
def new_player():
    """
    Registers a player name. Registering an existing name keeps its score.
    """
    data = request.get_json(silent=True) or {}
    return jsonify(get_engine().register(data.get('name'))), 200


@game.route('/dive', methods=['POST'])
def dive():
    """
    Claims one random unclaimed fragment for the diver, or resets the pool
    when every fragment has been found.
    """
    data = request.get_json(silent=True) or {}
    return jsonify(get_engine().dive(data.get('username'))), 200


@game.route('/data', methods=['GET'])
def get_data():
    """
    Returns the full game document for the leaderboard and gallery.
    """
    return jsonify(get_engine().snapshot())
