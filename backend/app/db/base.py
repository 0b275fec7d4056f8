from backend.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all in tests
from backend.app.models.customer import Customer  # noqa: F401
from backend.app.models.employee import Employee  # noqa: F401
from backend.app.models.project import Project  # noqa: F401
from backend.app.models.estimate import Estimate, EstimateItem  # noqa: F401
from backend.app.models.expense_report import BudgetLine, ExpenseReport  # noqa: F401
from backend.app.models.time_entry import TimeEntry  # noqa: F401
from backend.app.models.invoice import Invoice  # noqa: F401
from backend.app.models.invoice_line import InvoiceLine  # noqa: F401
from backend.app.models.invoice_sequence import InvoiceNumberSequence  # noqa: F401
from backend.app.models.audit_log import AuditLog  # noqa: F401
