from dotenv import load_dotenv

load_dotenv()

from server.server import create_app  # noqa: E402  # pylint: disable=wrong-import-position

server_app = create_app()
