def log_table_summary(logger, table, n_skipped=0):
    logger.info(f"=== {table.name.capitalize()} Table ===")
    logger.info("Rows: %s", f"{len(table):,}")
    logger.info("Skipped malformed rows: %s", f"{n_skipped:,}")
    if len(table) == 0:
        logger.warning(f"⚠️  {table.name} table is empty - every request will fall back to placeholders")
        return

    frame = table.frame
    item_columns = [c for c in frame.columns if c != "key"]
    empty_cells = int((frame[item_columns].apply(lambda col: col.str.strip() == "")).to_numpy().sum())
    logger.info(f"Empty item cells: {empty_cells} ({100 * empty_cells / frame[item_columns].size:.1f}%)")
    logger.info(f"Sample keys: {list(frame['key'].head(3))}")


def log_recommendation_summary(logger, identifier, kind, result, strategies):
    logger.info("-" * 60)
    logger.info(f"Recommendations for identifier={identifier!r}, kind={kind.value}")
    for source, strategy in strategies.items():
        logger.info(f"  {source:<14} strategy={strategy}")
    logger.info(f"  collaborative: {result.collaborative}")
    logger.info(f"  content:       {result.content}")
    logger.info(f"  external:      {result.external}")
