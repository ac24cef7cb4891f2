"""DeckDiff: decklist reconciliation against the Scryfall catalog."""
