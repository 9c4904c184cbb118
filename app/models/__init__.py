# Lorry Bay yard service: database models
# Import all models here for SQLAlchemy discovery

from app.models.operator import Operator           # noqa
from app.models.vehicle import Vehicle             # noqa
from app.models.action_log import ActionLog        # noqa
from app.models.prebooking import Prebooking       # noqa
