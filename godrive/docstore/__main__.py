"""Run the document store: ``python -m godrive.docstore``."""

import click

from godrive import config
from godrive.docstore.server import create_app


@click.command()
@click.option('--host', default='0.0.0.0', help='Interface to bind')
@click.option('--port', default=3000, help='Port to run the server on')
@click.option('--db', 'db_file', default=config.DOCSTORE_FILE, help='JSON database file')
def main(host, port, db_file):
    """Serve the JSON document store."""
    config.configure_logging()
    app = create_app(db_file)
    app.run(host=host, port=port, threaded=True)


if __name__ == '__main__':
    main()
