"""Move handlers. Each takes an :class:`~chain_connect.engine.context.EngineContext`
and returns a :class:`~chain_connect.engine.moves.MoveDescriptor` or None."""
