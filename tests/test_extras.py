from vidinfo.core import extras

WATCH_RESULTS = {
    "response": {
        "contents": {
            "twoColumnWatchNextResults": {
                "results": {"results": {"contents": [
                    {"videoPrimaryInfoRenderer": {}},
                    {"videoSecondaryInfoRenderer": {
                        "owner": {"videoOwnerRenderer": {
                            "thumbnail": {"thumbnails": [{"url": "small.jpg"}, {"url": "large.jpg"}]},
                            "subscriberCountText": {"simpleText": "3.5M subscribers"},
                        }},
                        "metadataRowContainer": {"metadataRowContainerRenderer": {"rows": [
                            {"metadataRowRenderer": {
                                "title": {"simpleText": "Song"},
                                "contents": [{"runs": [{"text": "Never Gonna Give You Up"}]}],
                            }},
                            {"metadataRowRenderer": {
                                "title": {"simpleText": "Artist"},
                                "contents": [{"runs": [{
                                    "text": "Rick Astley",
                                    "navigationEndpoint": {"commandMetadata": {"webCommandMetadata": {
                                        "url": "/channel/UCuAXFkgsw1L7xaCfnd5JJOw"}}},
                                }]}],
                            }},
                        ]}},
                    }},
                ]}},
                "secondaryResults": {"secondaryResults": {"results": [
                    {"compactVideoRenderer": {
                        "videoId": "yPYZpwSpKmA",
                        "title": {"simpleText": "Together Forever"},
                        "shortBylineText": {"runs": [{"text": "Rick Astley"}]},
                        "lengthText": {"simpleText": "3:25"},
                        "viewCountText": {"simpleText": "1,234,567 views"},
                    }},
                    {"compactAutoplayRenderer": {}},
                ]}},
            },
        },
    },
}

PLAYER_RESPONSE = {
    "videoDetails": {"channelId": "UCuAXFkgsw1L7xaCfnd5JJOw", "author": "Rick Astley"},
    "microformat": {"playerMicroformatRenderer": {"ownerProfileUrl": "http://www.youtube.com/user/RickAstleyVEVO"}},
}


def test_author():
    author = extras.get_author(WATCH_RESULTS, PLAYER_RESPONSE)
    assert author["id"] == "UCuAXFkgsw1L7xaCfnd5JJOw"
    assert author["channel_url"] == "https://www.youtube.com/channel/UCuAXFkgsw1L7xaCfnd5JJOw"
    assert author["user_url"] == "http://www.youtube.com/user/RickAstleyVEVO"
    assert author["avatar"] == "large.jpg"
    assert author["subscriber_count"] == "3.5M subscribers"


def test_author_missing():
    assert extras.get_author({}, {}) == {}


def test_media():
    media = extras.get_media(WATCH_RESULTS)
    assert media["song"] == "Never Gonna Give You Up"
    assert media["artist"] == "Rick Astley"
    assert media["artist_url"] == "https://www.youtube.com/channel/UCuAXFkgsw1L7xaCfnd5JJOw"


def test_related_videos():
    [video] = extras.get_related_videos(WATCH_RESULTS)
    assert video["id"] == "yPYZpwSpKmA"
    assert video["author"] == "Rick Astley"
    assert video["length_seconds"] == 205
    assert video["view_count"] == 1234567


def test_missing_sections_are_empty():
    assert extras.get_media({}) == {}
    assert extras.get_related_videos({}) == []
    assert extras.get_likes("") is None
    assert extras.get_dislikes(None) is None
