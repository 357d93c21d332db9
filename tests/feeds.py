from __future__ import annotations


RSS_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/">
  <channel>
    <title>Example RSS</title>
    <link>https://example.com/</link>
    <description>Example channel</description>
    <item>
      <title>Parliament passes budget</title>
      <link>https://example.com/news/budget</link>
      <description><![CDATA[<p>The budget was <b>approved</b> today.</p><img src="https://example.com/inline.jpg" />]]></description>
      <pubDate>Mon, 01 Jan 2024 12:00:00 GMT</pubDate>
      <category>Politics</category>
      <media:content url="https://example.com/media.jpg" medium="image" />
    </item>
    <item>
      <title>Rain expected this weekend</title>
      <link>https://example.com/news/rain</link>
      <description>Forecasters warn of heavy rain.</description>
      <pubDate>Tue, 02 Jan 2024 08:30:00 GMT</pubDate>
    </item>
  </channel>
</rss>
"""

ATOM_FEED = b"""<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Example Atom</title>
  <id>urn:example:feed</id>
  <updated>2024-01-03T10:00:00Z</updated>
  <entry>
    <title>Atom entry with several links</title>
    <id>urn:example:entry:1</id>
    <link rel="self" href="https://example.com/atom/1.xml" />
    <link rel="alternate" type="text/html" href="https://example.com/atom/1" />
    <published>2024-01-03T09:00:00Z</published>
    <updated>2024-01-03T10:00:00Z</updated>
    <summary>Short atom summary</summary>
  </entry>
</feed>
"""

MALFORMED_FEED = b"""<?xml version="1.0"?>
<rss version="2.0">
  <channel>
    <item>
      <title>Broken
      <link>https://example.com/broken</link>
  </channel>
"""


def rss_document(items: str) -> bytes:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/" '
        'xmlns:content="http://purl.org/rss/1.0/modules/content/">'
        "<channel><title>T</title><link>https://example.com/</link><description>D</description>"
        f"{items}"
        "</channel></rss>"
    ).encode("utf-8")


def rss_item(
    n: int,
    *,
    pub_date: str = "Mon, 01 Jan 2024 12:00:00 GMT",
    extra: str = "",
) -> str:
    return (
        "<item>"
        f"<title>Item {n}</title>"
        f"<link>https://example.com/{n}</link>"
        f"<description>Body {n}</description>"
        f"<pubDate>{pub_date}</pubDate>"
        f"{extra}"
        "</item>"
    )


