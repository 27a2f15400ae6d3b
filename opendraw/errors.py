"""Error kinds raised by the draw and the link codec.

They carry structured fields only; turning them into messages is the UI's job.
"""


class DrawError(Exception):
    pass


class InsufficientParticipants(DrawError):
    def __init__(self, count: int, minimum: int):
        super().__init__(count, minimum)
        self.count = count
        self.minimum = minimum


class DuplicateParticipant(DrawError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name


class DerangementUnsatisfiable(DrawError):
    def __init__(self, attempts: int):
        super().__init__(attempts)
        self.attempts = attempts


class InvalidOrTamperedLink(DrawError):
    pass
