from pagewright_core.facade.workbench import Workbench as Workbench
from pagewright_core.models.config import PagewrightConfig as PagewrightConfig
