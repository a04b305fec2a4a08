class PackingError(Exception):
    pass

# A tile asked for more colors than a palette can hold, or for
# colors that don't exist in the universe.
class InvalidTileError(PackingError):
    pass

# The exact evaluator refuses to search instances above its ceiling.
class InstanceTooLarge(PackingError):
    def __init__(self, num_tiles: int, max_tiles: int):
        super().__init__(f"Instance has {num_tiles} tiles, but exhaustive search is capped at {max_tiles}.")
        self.num_tiles = num_tiles
        self.max_tiles = max_tiles

# A constructed instance didn't beat the heuristic.  This is a bug in the
# construction, not something a user can fix.
class ConstructionFailedError(PackingError):
    pass

# A packing result broke the capacity or coverage rules.
class AssignmentInvariantError(PackingError):
    pass
