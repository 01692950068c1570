from pagewright_core.facade.workbench import Workbench as Workbench
