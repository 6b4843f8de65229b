# SPDX-License-Identifier: MIT

from typing import Optional

from timeblocks.model.time_entry import TimeEntry
from timeblocks.time import today_local_date_str


def get_time_entry_template(date: Optional[str] = None) -> TimeEntry:
    return {
        "date": date if date is not None else today_local_date_str(),
        "start": "",
        "end": "",
        "project": "",
        "activity": "",
    }
