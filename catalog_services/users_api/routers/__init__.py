# This file marks the users routers package.
