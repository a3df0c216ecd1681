"""Files Manager: personal file storage with asynchronous thumbnails"""
