# This file marks the services package for shared data-access modules.
# Entity services isolate SQL from transport concerns so routers stay thin.
