"""
Branch id allocation.
"""


class IDGenerator:
    """
    Hands out increasing branch ids.

    Ids chosen by the caller are reported through ``observe`` so that the
    generator never hands them out again.
    """

    def __init__(self, start_id: int = 0):
        self.current_id = start_id

    def next_id(self) -> int:
        allocated = self.current_id
        self.current_id += 1
        return allocated

    def peek_next_id(self) -> int:
        return self.current_id

    def observe(self, used_id: int) -> None:
        self.current_id = max(self.current_id, used_id + 1)

    def get_state(self) -> dict:
        return {"current_id": self.current_id}

    def set_state(self, state: dict) -> None:
        self.current_id = int(state["current_id"])
