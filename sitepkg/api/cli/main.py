"""Entry point for the sitepkg utility.

sitepkg shows how a site utility's configuration is put together::

    sitepkg paths                 # search dirs, candidate files, command paths
    sitepkg check FILE...         # read config files and report errors
    sitepkg get OPTION...         # value and source of options
    sitepkg --showconfig          # every option, value and source
"""

import sys
from typing import List, Optional

from loguru import logger

from sitepkg import __version__
from sitepkg.core.exceptions import SitePkgError
from sitepkg.site import SitePackage
from .commands.config import config_command
from .utils.output import setup_logging

PKG_NAME = "sitepkg"


def create_site(argv: Optional[List[str]] = None) -> SitePackage:
    """Create the sitepkg context and declare its own options."""
    site = SitePackage(PKG_NAME, __version__, argv=argv)
    site.registry.declare_bool("Debug", "d", True, False, "Show debugging output")
    site.help_text[site.program_name] = __doc__
    return site


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the CLI."""
    setup_logging()
    site = create_site(argv)

    try:
        args = site.configure_options()
    except SitePkgError as e:
        site.output.warn("%s", e)
        sys.exit(1)

    setup_logging(debug=site.verbosity.debug, verbose=site.verbosity.verbose)

    try:
        status = config_command(site, args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        status = 1
    except SitePkgError as e:
        site.output.warn("%s", e)
        status = 1
    sys.exit(status)


if __name__ == "__main__":
    main()
