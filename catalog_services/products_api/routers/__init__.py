# This file marks the products routers package.
