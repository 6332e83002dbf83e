# This file marks the routers package for shared route modules.
