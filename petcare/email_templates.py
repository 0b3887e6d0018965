"""
HTML email templates
Inline-styled markup so the messages render the same across mail clients
"""

from datetime import datetime

THEME = {
    "background": "#fdf6f0",
    "header": "#ffbb73",
    "heading": "#e07a5f",
    "button": "#81b29a",
    "alert": "#e91e63",
}


def booking_confirmed_template(
    user_name: str, booking_id: str, booking_date, booking_time: str, price, booking_url: str
) -> str:
    return f"""
      <div style="font-family: Arial, sans-serif; background: {THEME['background']}; padding: 20px; color: #333;">
        <table style="max-width: 600px; margin: auto; background: #fff; border-radius: 15px; overflow: hidden;">
          <tr>
            <td style="text-align: center; background: {THEME['header']}; padding: 20px;">
              <strong style="font-size: 22px; color: #fff;">PetCare 🐾</strong>
            </td>
          </tr>
          <tr>
            <td style="padding: 20px;">
              <h2 style="color: {THEME['heading']};">Hi {user_name or 'there'} 🐾</h2>
              <p style="font-size: 18px;">🎉 <strong>Your booking has been confirmed!</strong></p>
              <p style="margin: 15px 0; font-size: 16px; line-height: 1.5;">
                <strong>🐶 Booking ID:</strong> {booking_id}<br/>
                <strong>📅 Date:</strong> {booking_date}<br/>
                <strong>⏰ Time:</strong> {booking_time}<br/>
                <strong>💳 Total Price:</strong> ₹{price}
              </p>
              <div style="text-align: center; margin: 30px 0;">
                <a href="{booking_url}" style="background: {THEME['button']}; color: #fff; padding: 12px 25px; border-radius: 30px; text-decoration: none; font-size: 16px;">🐾 View Booking</a>
              </div>
              <p style="margin-top: 20px; color: #555; font-size: 14px;">Thank you for choosing us to care for your furry friend! ❤️</p>
            </td>
          </tr>
          <tr>
            <td style="background: #f1f1f1; text-align: center; font-size: 12px; color: #777; padding: 10px;">
              🐾 Your Pet Service Team<br/>
              <span style="font-size: 11px;">© {datetime.utcnow().year} PetCare</span>
            </td>
          </tr>
        </table>
      </div>
    """


def new_booking_admin_template(
    user_name: str, user_email: str, booking_id: str, booking_date, booking_time: str, price
) -> str:
    return f"""
      <div style="font-family: Arial, sans-serif; background: #fff; padding: 20px; color: #333;">
        <h2 style="color: {THEME['alert']};">📢 New Booking Alert! 🐾</h2>
        <p><strong>User:</strong> {user_name} ({user_email})</p>
        <p><strong>Booking ID:</strong> {booking_id}</p>
        <p><strong>Date:</strong> {booking_date}</p>
        <p><strong>Time:</strong> {booking_time}</p>
        <p><strong>Total Price:</strong> ₹{price}</p>
        <p>✅ Please verify and take necessary action.</p>
      </div>
    """
