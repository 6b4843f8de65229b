# SPDX-License-Identifier: MIT

from timeblocks.model.block import Block
from timeblocks.model.tracker_id import TrackerId
from timeblocks.time import today_local_date_str


def get_block_template(tracker_id: TrackerId) -> Block:
    return {
        "tracker_id": tracker_id,
        "entries": [],
        "sort": "none",
        "reference_date": today_local_date_str(),
    }
