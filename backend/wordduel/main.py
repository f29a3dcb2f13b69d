from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Word Duel server!'})


@main.route('/health')
def health():
    controller = current_app.extensions['wordduel']
    return jsonify({
        'status': 'healthy',
        'active_rooms': len(controller.registry),
        'active_players': controller.registry.player_count(),
        'dictionary_size': len(controller.dictionary),
    })
