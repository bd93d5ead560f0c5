"""
Schedule Composer
Backward date-time arithmetic from the target instant to the dough making instant
"""
from datetime import datetime, timedelta
from typing import List

from core.errors import StretchAndFoldError
from models.procedure import Procedure
from models.recipe import Schedule, StageWindow
from utils.log_utils import get_logger

logger = get_logger(__name__)


class ScheduleComposer:
    """
    Turns a procedure into dated instants

    The walk goes strictly backward from the target instant: the last stage
    ends at the seasoning instant, each gap of after stage work belongs to
    the stage that precedes it, and the dough is made one lead time before
    the first stage starts. Stretch and folds are then placed forward from
    the start of their stage.
    """

    def compose(self, procedure: Procedure) -> Schedule:
        """
        Compute every instant of the procedure

        Args:
            procedure: Scheduling request

        Returns:
            Schedule

        Raises:
            StretchAndFoldError: The folds do not fall strictly inside their stage
        """
        seasoning_instant = procedure.target_instant - procedure.lag_time

        stages = procedure.leavening_stages
        windows: List[StageWindow] = []
        end = seasoning_instant
        for i in range(len(stages) - 1, -1, -1):
            start = end - stages[i].duration
            windows.append(StageWindow(start=start, end=end))
            if i > 0:
                end = start - stages[i - 1].after_stage_work
        windows.reverse()

        dough_making_instant = windows[0].start - procedure.lead_time
        folds = self.stretch_and_fold_instants(procedure, windows[procedure.stretch_and_fold_stage_index])
        logger.debug("Dough making at %s, seasoning at %s", dough_making_instant, seasoning_instant)

        return Schedule(
            dough_making_instant=dough_making_instant,
            stage_windows=windows,
            stretch_and_fold_instants=folds,
            seasoning_instant=seasoning_instant,
        )

    def stretch_and_fold_instants(self, procedure: Procedure, window: StageWindow) -> List[datetime]:
        """
        Place each fold after the cumulative lapses from the stage start

        Args:
            procedure: Scheduling request
            window: Window of the stage hosting the folds

        Returns:
            Instants of the folds
        """
        if not procedure.stretch_and_fold_stages:
            return []

        total = procedure.total_stretch_and_fold_duration()
        if window.start + total >= window.end:
            raise StretchAndFoldError(
                f"Stretch and folds last {total}, the last one does not fall inside "
                f"leavening stage {procedure.stretch_and_fold_stage_index + 1} "
                f"({window.start:%H:%M} - {window.end:%H:%M})"
            )

        instants = []
        offset = timedelta(0)
        for fold in procedure.stretch_and_fold_stages:
            offset += fold.lapse
            instants.append(window.start + offset)
        return instants
