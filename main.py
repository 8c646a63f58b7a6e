# main.py
from poker_equity.config import load_config
from poker_equity.game import GameSpec
from poker_equity.logging_config import configure_logging, logger
from poker_equity.simulator import EquitySimulator, enumerate_equity


# =============================================================================
# CONFIGURATION
# =============================================================================
config = load_config()
configure_logging(
    level=config.logging.level,
    log_dir=config.logging.log_dir,
    log_to_file=config.logging.log_to_file
)

# =============================================================================
# SITUATION SETUP
# =============================================================================
spec = GameSpec.from_tokens(
    board=config.situation.get('board', []),
    players=config.situation.get('players', [None, None])
)


# =============================================================================
# SIMULATION
# =============================================================================
def main():
    logger.info(f"Situation:\n{spec}")

    simulator = EquitySimulator(
        spec,
        iterations=config.simulation.iterations,
        workers=config.simulation.workers,
        seed=config.simulation.seed,
        use_numba=config.simulation.use_numba,
        time_limit=config.simulation.time_limit
    )
    result = simulator.run()

    logger.info("=== MONTE CARLO RESULTS ===")
    for line in result.summary_lines():
        logger.info(line)

    # Cheap enough to do exactly when only the board is unknown
    if not spec.unknown_players() and len(spec.board) >= 3:
        exact = enumerate_equity(spec)
        logger.info("=== EXACT RESULTS ===")
        for line in exact.summary_lines():
            logger.info(line)


if __name__ == "__main__":
    main()
