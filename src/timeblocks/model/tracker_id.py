# SPDX-License-Identifier: MIT

import uuid

type TrackerId = str

TRACKER_ID_LENGTH = 9


def generate_tracker_id() -> TrackerId:
    return uuid.uuid4().hex[:TRACKER_ID_LENGTH]
