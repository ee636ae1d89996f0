"""Plugin logic: replies, encoders, SQLite-backed stores and response parsers."""