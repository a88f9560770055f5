# File: /docview/db/base_class.py | Version: 1.0 | Title: Declarative Base
from sqlalchemy.orm import declarative_base

# Single, authoritative Base for all models
Base = declarative_base()
