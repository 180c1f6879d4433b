# sitemaphelper/utils.py
import logging
import os

logger = logging.getLogger(__name__)


def write_xml(path, content):
    """Write content to path, creating parent directories. Returns False on I/O failure."""
    path = os.fspath(path)
    directory = os.path.dirname(path)
    try:
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
    except OSError:
        logger.error("Failed to write sitemap to %s", path, exc_info=True)
        return False
    logger.debug("Sitemap written to %s (%d bytes)", path, len(content))
    return True
