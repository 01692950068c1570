from fastapi import Request

from pagewright_core.facade.workbench import Workbench


def get_workbench(request: Request) -> Workbench:
    return request.app.state.workbench
