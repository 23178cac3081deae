"""
Initialize the CLI package. Contains the typer apps for importing and schema maintenance.
"""

import logging

# SQLAlchemy engine chatter is only useful when debugging queries
logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
