from flask import Blueprint, jsonify, current_app
from nanhai.services.game import get_engine

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Nanhai No.1 dive server!'})

@main.route('/catalog')
def catalog():
    """The static artifact list, for clients that render the gallery skeleton."""
    engine = get_engine(current_app)
    return jsonify([a.to_dict() for a in engine.catalog])
