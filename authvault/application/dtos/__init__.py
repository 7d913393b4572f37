# authvault/application/dtos/__init__.py
