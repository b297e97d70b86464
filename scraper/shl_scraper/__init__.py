"""SHL live feed scraper: cached play-by-play, player and team stats."""
