MAX_VISIBLE_PAGES = 5
