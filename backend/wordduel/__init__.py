import click
from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ALLOWED_ORIGINS', '*')
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from wordduel.dictionary import WordDictionary
    from wordduel.services.game import RoomRegistry, SessionController, get_evaluator
    from wordduel.socketio_events import SocketIOTransport, register_socketio_handlers

    word_length = int(flask_app.config.get('WORD_LENGTH', 5))
    dictionary = WordDictionary.from_file(flask_app.config['WORD_LIST_PATH'], length=word_length)
    flask_app.logger.info(f"Loaded {len(dictionary)} valid words.")

    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    controller = SessionController(
        registry=RoomRegistry(code_length=int(flask_app.config.get('ROOM_CODE_LENGTH', 6))),
        dictionary=dictionary,
        transport=SocketIOTransport(socketio, namespace=namespace),
        evaluator=get_evaluator(flask_app.config.get('FEEDBACK_MODE', 'single_pass')),
        max_guesses=int(flask_app.config.get('MAX_GUESSES', 6)),
    )
    flask_app.extensions['wordduel'] = controller

    from wordduel.main import main
    flask_app.register_blueprint(main)

    register_socketio_handlers(namespace=namespace)

    @click.command('check-word')
    @click.argument('words', nargs=-1, required=True)
    def check_word_command(words):
        """Report whether each WORD is in the loaded dictionary."""
        for word in words:
            verdict = 'valid' if dictionary.contains(word) else 'not in word list'
            click.echo(f"{word.upper()}: {verdict}")
        click.echo(f"({len(dictionary)} words loaded)")

    flask_app.cli.add_command(check_word_command)

    return flask_app
