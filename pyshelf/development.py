"""
Run a development server.
"""
from argparse import ArgumentParser, ArgumentDefaultsHelpFormatter

from pyshelf.app import create_app


def main():
    parser = ArgumentParser(formatter_class=ArgumentDefaultsHelpFormatter,
                            description="Serve a package index for development")
    parser.add_argument('-a',
                        dest='all_interfaces',
                        action='store_true',
                        default=False,
                        help='Listen on all interfaces')
    parser.add_argument('-p',
                        dest='port',
                        type=int,
                        default=5000,
                        help='Listen port')
    parser.add_argument('-c',
                        dest='settings',
                        default=None,
                        help='Settings file (overrides PYSHELF_SETTINGS)')
    args = parser.parse_args()

    app = create_app(debug=True, settings=args.settings)
    app.logger.info("Storing artifacts with the {} backend".format(app.config["STORAGE_BACKEND"]))

    host = '0.0.0.0' if args.all_interfaces else '127.0.0.1'
    app.run(host=host, port=args.port)
