# Import all the models, so that Base has them before being
# imported by Alembic or create_all
from app.db.base_class import Base  # noqa

from app.models.employee import Employee  # noqa
from app.models.project import Project  # noqa
from app.models.assignment import EmployeeProject  # noqa
from app.models.po_amendment import POAmendment  # noqa
