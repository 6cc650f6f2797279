import io
import pytest
import tweepy
from unittest.mock import Mock, patch
from helpers.errors import PublishFailed
from helpers.publisher import DryRunPublisher, TwitterPublisher, create_publisher


class TestTwitterPublisher:
    
    @patch('helpers.publisher.tweepy.Client')
    def test_init_creates_client(self, mock_client_class):
        publisher = TwitterPublisher('key', 'key_secret', 'token', 'token_secret')
        
        assert publisher.client == mock_client_class.return_value
        mock_client_class.assert_called_once_with(
            consumer_key='key',
            consumer_secret='key_secret',
            access_token='token',
            access_token_secret='token_secret',
        )
    
    def test_publish(self):
        client = Mock()
        client.create_tweet.return_value = Mock(data={'id': '1234', 'text': 'fix bug'})
        publisher = TwitterPublisher('key', 'key_secret', 'token', 'token_secret', client=client)
        
        publisher.publish('fix bug\n\nhttp://x/1')
        
        client.create_tweet.assert_called_once_with(text='fix bug\n\nhttp://x/1')
    
    def test_publish_error(self):
        client = Mock()
        client.create_tweet.side_effect = tweepy.TweepyException('duplicate content')
        publisher = TwitterPublisher('key', 'key_secret', 'token', 'token_secret', client=client)
        
        with pytest.raises(PublishFailed, match='duplicate content'):
            publisher.publish('fix bug')


class TestDryRunPublisher:
    
    def test_publish_writes_message(self):
        stream = io.StringIO()
        publisher = DryRunPublisher(stream)
        
        publisher.publish('fix bug\n\nhttp://x/1')
        
        assert stream.getvalue() == 'fix bug\n\nhttp://x/1\n'
    
    def test_default_stream_is_stdout(self, capsys):
        DryRunPublisher().publish('fix bug')
        
        assert capsys.readouterr().out == 'fix bug\n'


class TestCreatePublisher:
    
    @patch('helpers.publisher.tweepy.Client')
    def test_broadcast_mode(self, mock_client_class):
        config = Mock(
            publish_mode='broadcast',
            twitter_api_key='key',
            twitter_api_key_secret='key_secret',
            twitter_access_token='token',
            twitter_access_token_secret='token_secret',
        )
        
        publisher = create_publisher(config)
        
        assert isinstance(publisher, TwitterPublisher)
        mock_client_class.assert_called_once()
    
    def test_dry_run_mode(self):
        publisher = create_publisher(Mock(publish_mode='dry-run'))
        
        assert isinstance(publisher, DryRunPublisher)
    
    def test_unknown_mode(self):
        with pytest.raises(ValueError, match='Unknown publish mode'):
            create_publisher(Mock(publish_mode='carrier-pigeon'))
