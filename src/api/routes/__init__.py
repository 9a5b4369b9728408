from api.routes.contest import ContestController, SolutionController
from api.routes.settings import SettingsController
from api.routes.video import VideoController

__all__ = ["ContestController", "SettingsController", "SolutionController", "VideoController"]
