# Import every model so Base.metadata knows all tables
from app.db.models.role import Role  # noqa: F401
from app.db.models.user import User  # noqa: F401
from app.db.models.category import Category  # noqa: F401
from app.db.models.service import Service  # noqa: F401
from app.db.models.order import Order  # noqa: F401
from app.db.models.feedback import Feedback  # noqa: F401
from app.db.models.schema_migration import SchemaMigration  # noqa: F401
