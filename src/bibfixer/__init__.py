"""Post-processing tools for BibTeX files exported by Mendeley."""

import logging

# Install a NullHandler to avoid emitting logs unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())
