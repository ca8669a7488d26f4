"""
Mock AniDB HTTP API responses for testing.

Reference: https://wiki.anidb.net/HTTP_API_Definition
"""

# GET /httpapi?request=anime&aid=23 (extrait)
ANIDB_ANIME_RESPONSE = """<?xml version="1.0" encoding="UTF-8"?>
<anime id="23" restricted="false">
  <type>TV Series</type>
  <episodecount>26</episodecount>
  <startdate>1998-04-03</startdate>
  <enddate>1999-04-24</enddate>
  <titles>
    <title xml:lang="x-jat" type="main">Cowboy Bebop</title>
    <title xml:lang="ja" type="official">カウボーイビバップ</title>
    <title xml:lang="en" type="official">Cowboy Bebop (EN)</title>
    <title xml:lang="en" type="synonym">CB</title>
  </titles>
  <creators>
    <name id="4303" type="Music">Kanno Youko</name>
    <name id="4234" type="Direction">Watanabe Shinichirou</name>
    <name id="4235" type="Assistant Direction">Okamura Tensai</name>
    <name id="4236" type="Series Composition">Nobumoto Keiko</name>
    <name id="4237" type="Character Design">Kawamoto Toshihiro</name>
    <name id="291" type="Animation Work">Sunrise</name>
  </creators>
  <description>In the year 2071, humanity has colonized several of the planets. http://anidb.net/ch23 [Spike Spiegel] is a bounty hunter.</description>
  <ratings>
    <permanent count="12345">8.78</permanent>
    <temporary count="12400">8.80</temporary>
  </ratings>
  <resources>
    <resource type="1">
      <externalentity><identifier>13</identifier></externalentity>
    </resource>
    <resource type="2">
      <externalentity><identifier>1</identifier></externalentity>
    </resource>
  </resources>
  <tags>
    <tag id="1" weight="600"><name>science fiction</name></tag>
    <tag id="2" weight="0"><name>jazz</name></tag>
    <tag id="3" weight="400"><name>space</name></tag>
    <tag id="4" weight="300"><name>bounty hunter</name></tag>
  </tags>
  <characters>
    <character id="23" type="main character in">
      <name>Spike Spiegel</name>
      <seiyuu id="17">Yamadera Kouichi</seiyuu>
    </character>
    <character id="24" type="appears in">
      <name>Punch</name>
      <seiyuu id="18">Ishizuka Unshou</seiyuu>
    </character>
  </characters>
  <episodes>
    <episode id="1000">
      <epno type="2">S1</epno>
      <length>5</length>
    </episode>
    <episode id="1001">
      <epno type="1">1</epno>
      <length>25</length>
    </episode>
  </episodes>
</anime>
"""

ANIDB_RESTRICTED_RESPONSE = """<?xml version="1.0" encoding="UTF-8"?>
<anime id="999" restricted="true">
  <titles><title xml:lang="x-jat" type="main">Restricted Title</title></titles>
</anime>
"""

ANIDB_NOT_FOUND_RESPONSE = "<error>Anime not found</error>"

ANIDB_BANNED_RESPONSE = "<error>Banned</error>"
